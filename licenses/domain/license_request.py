"""
LicenseRequest domain entity.

A pending registration from an installation that has no license yet.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Optional

from core.domain.clock import utc_now
from core.domain.value_objects import normalize_domain, UNKNOWN_DOMAIN
from licenses.domain.license import License

DEFAULT_PENDING_MESSAGE = "Registration request is awaiting approval."
AUTO_REQUEST_ORGANIZATION = "Unknown (auto-request)"
AUTO_REQUEST_CONTACT = "System Admin"
AUTO_REQUEST_NOTE = "Automatic request from installation"
AUTO_REQUEST_MESSAGE = "Your registration request is being processed. Please wait for approval."

EDITABLE_FIELDS = (
    "organization",
    "contact_person",
    "email",
    "phone_number",
    "note",
    "custom_message",
)


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:16]}"


@dataclass(frozen=True)
class LicenseRequest:
    """
    LicenseRequest domain entity.

    Created manually by the admin or automatically when an unknown domain
    calls verification without a key. Removed on approval or rejection.
    """

    id: str
    organization: str
    contact_person: str
    email: str
    requested_domain: str
    request_date: datetime
    updated_at: datetime
    phone_number: str = ""
    note: str = ""
    custom_message: str = ""

    def __post_init__(self):
        if not self.id:
            raise ValueError("Request ID is required")

    @classmethod
    def create(
        cls,
        organization: str,
        contact_person: str,
        email: str,
        requested_domain: str,
        phone_number: str = "",
        note: str = "",
        custom_message: str = "",
        request_id: Optional[str] = None,
    ) -> "LicenseRequest":
        normalized = normalize_domain(requested_domain)
        if normalized == UNKNOWN_DOMAIN:
            raise ValueError("A license request needs a valid domain")

        now = utc_now()
        return cls(
            id=request_id or new_request_id(),
            organization=organization,
            contact_person=contact_person,
            email=email,
            requested_domain=normalized,
            request_date=now,
            updated_at=now,
            phone_number=phone_number or "",
            note=note or "",
            custom_message=custom_message or "",
        )

    @classmethod
    def auto_for_domain(cls, domain: str) -> "LicenseRequest":
        """Placeholder request recorded when an unknown installation checks in."""
        normalized = normalize_domain(domain)
        return cls.create(
            organization=AUTO_REQUEST_ORGANIZATION,
            contact_person=AUTO_REQUEST_CONTACT,
            email=f"admin@{normalized}",
            requested_domain=normalized,
            note=AUTO_REQUEST_NOTE,
            custom_message=AUTO_REQUEST_MESSAGE,
        )

    @property
    def pending_message(self) -> str:
        return self.custom_message or DEFAULT_PENDING_MESSAGE

    def update_details(self, **changes: Any) -> "LicenseRequest":
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update request fields: {', '.join(sorted(unknown))}")
        cleaned = {name: ("" if value is None else value) for name, value in changes.items()}
        return replace(self, **cleaned, updated_at=utc_now())

    def approve(
        self,
        valid_until: date,
        features: Dict[str, bool],
        key_prefix: str,
        overrides: Optional[Dict[str, str]] = None,
    ) -> License:
        """
        Turn the request into an active license for the requested domain.

        ``overrides`` may correct organization, contact_person, email or
        phone_number before the license is issued.
        """
        details = {
            "organization": self.organization,
            "contact_person": self.contact_person,
            "email": self.email,
            "phone_number": self.phone_number,
        }
        details.update({k: v for k, v in (overrides or {}).items() if k in details and v})
        return License.create(
            domain=self.requested_domain,
            valid_until=valid_until,
            features=features,
            note=self.note,
            key_prefix=key_prefix,
            **details,
        )
