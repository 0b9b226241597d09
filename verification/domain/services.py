"""
Verification domain service.

Pure decision logic for the public verification call. Lookups and
writes stay in the application handler; this module only turns what
was found into an HTTP status and a response body.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from catalog.domain.module_definition import ModuleDefinition
from core.domain.clock import utc_today
from core.domain.value_objects import DomainName, LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_request import LicenseRequest

DOMAIN_MATCH_MESSAGE = "License found via domain match."
SUSPENDED_MESSAGE = "License for this domain is suspended."
REQUESTED_MESSAGE = (
    "Registration request created. We will review your request and get back to you."
)
INVALID_DOMAIN_ERROR = (
    "Invalid domain. Please ensure your request includes a valid Origin or Referer header."
)
INVALID_KEY_ERROR = "Invalid License Key"
DOMAIN_MISMATCH_ERROR = "Domain Mismatch"
LICENSE_SUSPENDED_ERROR = "License Suspended"


class VerificationOutcome(Enum):
    """Which branch of the verification decision was taken."""

    ACTIVE = "active"
    EXPIRED = "expired"
    SUSPENDED = "suspended"
    PENDING = "pending"
    REQUESTED = "requested"
    INVALID_DOMAIN = "invalid_domain"
    VALID = "valid"
    INVALID_KEY = "invalid_key"
    DOMAIN_MISMATCH = "domain_mismatch"
    KEY_SUSPENDED = "key_suspended"


@dataclass(frozen=True)
class VerificationResult:
    """HTTP status, JSON body and decision branch of one verification."""

    http_status: int
    body: Dict[str, Any] = field(default_factory=dict)
    outcome: Optional[VerificationOutcome] = None

    @property
    def is_error(self) -> bool:
        return self.http_status >= 400


class LicenseVerifier:
    """
    Decides the verification response.

    Without a key the caller is identified by domain alone: an existing
    license is recovered, a pending request reports its status, and an
    unknown domain needs an automatic request (``check_domain`` returns
    None). With a key the key must exist, match the calling domain and
    not be suspended.
    """

    def __init__(self, modules: List[ModuleDefinition], today: Optional[date] = None):
        self.modules = modules
        self.today = today or utc_today()

    def rich_modules(self, license: License) -> List[Dict[str, Any]]:
        """One entry per catalog module, flagged with the license's switch."""
        return [module.describe(license.features.get(module.id) is True) for module in self.modules]

    def _license_body(self, license: License, status: str) -> Dict[str, Any]:
        expired = license.is_expired(self.today)
        return {
            "status": status,
            "validUntil": license.valid_until.isoformat(),
            "daysRemaining": license.days_remaining(self.today),
            "modules": self.rich_modules(license),
            "features": {} if expired else dict(license.features),
        }

    def check_domain(
        self,
        domain: DomainName,
        license: Optional[License],
        pending: Optional[LicenseRequest],
    ) -> Optional[VerificationResult]:
        """
        Resolve a keyless call.

        Returns None when the domain is valid but unknown, meaning an
        automatic request has to be recorded.
        """
        if license is not None:
            status = license.effective_status(self.today)
            if status is LicenseStatus.SUSPENDED:
                body = self._license_body(license, "suspended")
                body["features"] = {}
                body["message"] = SUSPENDED_MESSAGE
                return VerificationResult(200, body, VerificationOutcome.SUSPENDED)
            body = self._license_body(license, status.value)
            body["message"] = DOMAIN_MATCH_MESSAGE
            body["key"] = license.key
            outcome = (
                VerificationOutcome.EXPIRED
                if status is LicenseStatus.EXPIRED
                else VerificationOutcome.ACTIVE
            )
            return VerificationResult(200, body, outcome)

        if pending is not None:
            return VerificationResult(
                200,
                {"status": "pending", "message": pending.pending_message, "requestId": pending.id},
                VerificationOutcome.PENDING,
            )

        if not domain.is_known:
            return VerificationResult(
                400, {"error": INVALID_DOMAIN_ERROR}, VerificationOutcome.INVALID_DOMAIN
            )

        return None

    def requested(self, request: LicenseRequest) -> VerificationResult:
        """Response after an automatic request was recorded."""
        return VerificationResult(
            201,
            {"status": "requested", "message": REQUESTED_MESSAGE, "requestId": request.id},
            VerificationOutcome.REQUESTED,
        )

    def check_key(self, domain: DomainName, license: Optional[License]) -> VerificationResult:
        """Resolve a call that presents a key. ``license`` is the key lookup result."""
        if license is None:
            return VerificationResult(
                403, {"error": INVALID_KEY_ERROR}, VerificationOutcome.INVALID_KEY
            )
        if not license.matches_domain(domain.value):
            return VerificationResult(
                403, {"error": DOMAIN_MISMATCH_ERROR}, VerificationOutcome.DOMAIN_MISMATCH
            )
        if license.status is LicenseStatus.SUSPENDED:
            return VerificationResult(
                403, {"error": LICENSE_SUSPENDED_ERROR}, VerificationOutcome.KEY_SUSPENDED
            )
        if license.is_expired(self.today):
            return VerificationResult(
                200, self._license_body(license, "expired"), VerificationOutcome.EXPIRED
            )
        return VerificationResult(
            200, self._license_body(license, "valid"), VerificationOutcome.VALID
        )
