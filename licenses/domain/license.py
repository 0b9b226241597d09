"""
License domain entity.

This is the core domain entity representing a license bound to one
installation domain. It contains business logic and is independent of
infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from core.domain.clock import utc_now, utc_today
from core.domain.value_objects import LicenseStatus, normalize_domain, UNKNOWN_DOMAIN
from licenses.domain.license_key import generate_license_key

EDITABLE_FIELDS = (
    "organization",
    "contact_person",
    "email",
    "phone_number",
    "domain",
    "valid_until",
    "note",
    "status",
)


def new_license_id() -> str:
    return f"lic_{uuid.uuid4().hex[:16]}"


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Grants the installation running on ``domain`` access to the modules
    switched on in ``features``. Only ``active`` and ``suspended`` are
    stored; expiry is derived from ``valid_until``.
    """

    id: str
    organization: str
    contact_person: str
    email: str
    domain: str
    key: str
    valid_until: date
    status: LicenseStatus
    features: Dict[str, bool]
    created_at: datetime
    updated_at: datetime
    phone_number: str = ""
    note: str = ""

    def __post_init__(self):
        """Validate license entity."""
        if not self.id:
            raise ValueError("License ID is required")
        if not self.key or not self.key.strip():
            raise ValueError("License key cannot be empty")
        if len(self.key) > 100:
            raise ValueError("License key too long")
        if self.status is LicenseStatus.EXPIRED:
            raise ValueError("Expired is derived from valid_until and cannot be stored")

    @classmethod
    def create(
        cls,
        organization: str,
        contact_person: str,
        email: str,
        domain: str,
        valid_until: date,
        features: Optional[Dict[str, bool]] = None,
        phone_number: str = "",
        note: str = "",
        key_prefix: str = "FFW",
        key: Optional[str] = None,
        license_id: Optional[str] = None,
    ) -> "License":
        """
        Create a new active License.

        Args:
            organization: Licensee organization
            contact_person: Contact at the organization
            email: Contact email
            domain: Installation domain, normalized on the way in
            valid_until: Last day the license is valid
            features: Module id -> enabled
            key_prefix: Prefix for the generated key
            key: Explicit key (generated if not provided)
            license_id: Explicit id (generated if not provided)

        Returns:
            License entity instance
        """
        normalized = normalize_domain(domain)
        if normalized == UNKNOWN_DOMAIN:
            raise ValueError("A license needs a valid domain")

        now = utc_now()
        return cls(
            id=license_id or new_license_id(),
            organization=organization,
            contact_person=contact_person,
            email=email,
            domain=normalized,
            key=key or generate_license_key(key_prefix),
            valid_until=valid_until,
            status=LicenseStatus.ACTIVE,
            features=_clean_features(features),
            created_at=now,
            updated_at=now,
            phone_number=phone_number or "",
            note=note or "",
        )

    def is_expired(self, today: Optional[date] = None) -> bool:
        """A license is valid through the whole ``valid_until`` day."""
        return (today or utc_today()) > self.valid_until

    def days_remaining(self, today: Optional[date] = None) -> int:
        return max(0, (self.valid_until - (today or utc_today())).days)

    def effective_status(self, today: Optional[date] = None) -> LicenseStatus:
        if self.status is LicenseStatus.SUSPENDED:
            return LicenseStatus.SUSPENDED
        if self.is_expired(today):
            return LicenseStatus.EXPIRED
        return LicenseStatus.ACTIVE

    def enabled_modules(self) -> List[str]:
        return [module_id for module_id, enabled in self.features.items() if enabled]

    def matches_domain(self, domain: str) -> bool:
        return normalize_domain(self.domain) == normalize_domain(domain)

    def with_features(self, features: Dict[str, bool]) -> "License":
        return replace(self, features=_clean_features(features), updated_at=utc_now())

    def update_details(self, **changes: Any) -> "License":
        """
        Return a copy with the given editable fields changed.

        Unknown fields raise ``ValueError``. ``domain`` is normalized and
        ``status`` accepts the stored values only.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update license fields: {', '.join(sorted(unknown))}")

        if "domain" in changes:
            changes["domain"] = normalize_domain(changes["domain"])
            if changes["domain"] == UNKNOWN_DOMAIN:
                raise ValueError("A license needs a valid domain")
        if "status" in changes and not isinstance(changes["status"], LicenseStatus):
            changes["status"] = LicenseStatus.stored(changes["status"])
        for text_field in ("phone_number", "note"):
            if text_field in changes and changes[text_field] is None:
                changes[text_field] = ""

        return replace(self, **changes, updated_at=utc_now())

    def revoke(self) -> "License":
        """Suspend the license. Revoking a suspended license is a no-op change."""
        return replace(self, status=LicenseStatus.SUSPENDED, updated_at=utc_now())

    def reactivate(self) -> "License":
        if self.status is not LicenseStatus.SUSPENDED:
            raise ValueError("Can only reactivate a suspended license")
        return replace(self, status=LicenseStatus.ACTIVE, updated_at=utc_now())


def _clean_features(features: Optional[Dict[str, Any]]) -> Dict[str, bool]:
    return {str(module_id): enabled is True for module_id, enabled in (features or {}).items()}
