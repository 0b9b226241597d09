"""
CreateLicenseCommand.

Command to issue a license directly, without a prior request.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional


@dataclass
class CreateLicenseCommand:
    """
    Command to create a license for a domain.

    ``valid_until`` defaults to today plus LICENSE_DEFAULT_VALIDITY_DAYS and
    ``features`` to LICENSE_DEFAULT_FEATURES.
    """

    organization: str
    contact_person: str
    email: str
    domain: str
    valid_until: Optional[date] = None
    features: Optional[Dict[str, bool]] = None
    phone_number: str = ""
    note: str = ""
