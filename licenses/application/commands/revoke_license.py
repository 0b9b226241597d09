"""
Commands that flip a license between active and suspended.
"""

from dataclasses import dataclass


@dataclass
class RevokeLicenseCommand:
    """Command to suspend a license."""

    license_id: str


@dataclass
class ReactivateLicenseCommand:
    """Command to reactivate a suspended license."""

    license_id: str
