"""
Commands that edit an existing license.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class UpdateLicenseCommand:
    """Change license details. Keys of ``changes`` are entity field names."""

    license_id: str
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UpdateLicenseFeaturesCommand:
    """Replace the module switches of a license."""

    license_id: str
    features: Dict[str, bool] = field(default_factory=dict)
