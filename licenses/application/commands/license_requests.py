"""
Commands for the license request lifecycle.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional


@dataclass
class CreateRequestCommand:
    """Command to record a license request by hand."""

    organization: str
    contact_person: str
    email: str
    requested_domain: str
    phone_number: str = ""
    note: str = ""
    custom_message: str = ""


@dataclass
class UpdateRequestCommand:
    """Change request details. Keys of ``changes`` are entity field names."""

    request_id: str
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ApproveRequestCommand:
    """
    Command to turn a request into a license.

    ``overrides`` may correct organization, contact_person, email or
    phone_number before the license is issued.
    """

    request_id: str
    valid_until: Optional[date] = None
    features: Optional[Dict[str, bool]] = None
    overrides: Dict[str, str] = field(default_factory=dict)


@dataclass
class RejectRequestCommand:
    """Command to discard a request."""

    request_id: str
