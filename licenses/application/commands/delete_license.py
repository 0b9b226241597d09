"""
DeleteLicenseCommand.
"""

from dataclasses import dataclass


@dataclass
class DeleteLicenseCommand:
    """Command to remove a license permanently."""

    license_id: str
