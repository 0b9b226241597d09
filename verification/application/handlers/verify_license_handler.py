"""
VerifyLicenseHandler.

Runs the public verification call: looks up the license or request for
the calling domain, records an automatic request for unknown domains,
and appends every answer to the API log.
"""
import logging
import time
from typing import Optional

from catalog.application.services.catalog_cache_service import CatalogCacheService
from catalog.ports.module_repository import ModuleRepository
from core.domain.events import EventBus
from core.domain.value_objects import DomainName
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import (
    license_requests_created_total,
    license_verifications_total,
    verification_duration_seconds,
)
from licenses.domain.events import LicenseRequestCreated
from licenses.domain.license_request import LicenseRequest
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository
from verification.application.commands.verify_license import VerifyLicenseCommand
from verification.domain.api_log_entry import ApiLogEntry
from verification.domain.services import LicenseVerifier, VerificationResult
from verification.ports.api_log_repository import ApiLogRepository

logger = logging.getLogger(__name__)


class VerifyLicenseHandler:
    """Handler for VerifyLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        request_repository: LicenseRequestRepository,
        module_repository: ModuleRepository,
        api_log_repository: ApiLogRepository,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.request_repository = request_repository
        self.module_repository = module_repository
        self.api_log_repository = api_log_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: VerifyLicenseCommand) -> VerificationResult:
        """
        Handle verify license command.

        Args:
            command: VerifyLicenseCommand

        Returns:
            VerificationResult with HTTP status and JSON body
        """
        started = time.monotonic()
        domain = DomainName.from_origin(command.origin)
        key = (command.key or "").strip() or None
        modules = await CatalogCacheService.get_modules(self.module_repository)
        verifier = LicenseVerifier(modules)

        if key:
            license = await self.license_repository.find_by_key(key)
            result = verifier.check_key(domain, license)
        else:
            result = await self._check_domain(verifier, domain)

        await self.api_log_repository.append(
            ApiLogEntry.record(
                source_url=domain.value,
                provided_key=key,
                response_status=result.http_status,
                response_body=result.body,
                endpoint=command.endpoint,
            )
        )

        license_verifications_total.labels(outcome=result.outcome.value).inc()
        verification_duration_seconds.observe(time.monotonic() - started)
        logger.info(
            "License verification",
            extra={
                "domain": domain.value,
                "outcome": result.outcome.value,
                "status_code": result.http_status,
                "with_key": key is not None,
            },
        )
        return result

    async def _check_domain(self, verifier: LicenseVerifier, domain: DomainName) -> VerificationResult:
        license = await self.license_repository.find_by_domain(domain.value)
        pending = None
        if license is None:
            pending = await self.request_repository.find_by_domain(domain.value)

        result = verifier.check_domain(domain, license, pending)
        if result is not None:
            return result

        request = await self.request_repository.save(LicenseRequest.auto_for_domain(domain.value))
        license_requests_created_total.labels(source="auto").inc()
        await self.event_bus.publish(
            LicenseRequestCreated(request.id, domain=domain.value, automatic=True)
        )
        return verifier.requested(request)
