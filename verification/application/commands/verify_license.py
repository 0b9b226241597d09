"""
VerifyLicenseCommand.

Command issued by an installation checking its license.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyLicenseCommand:
    """
    Command to verify a license.

    ``origin`` is the Origin header, or the Referer when Origin is absent.
    """

    origin: Optional[str]
    key: Optional[str] = None
    endpoint: str = "/api/v1/license/verify"
