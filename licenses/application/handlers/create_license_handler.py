"""
CreateLicenseHandler.

Handles manual license creation from the dashboard or an admin action.
"""

import logging
from datetime import timedelta
from typing import Optional

from django.conf import settings

from core.domain.clock import utc_today
from core.domain.events import EventBus
from core.domain.exceptions import DuplicateDomainError
from core.domain.value_objects import Email, normalize_domain
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import licenses_created_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.domain.events import LicenseCreated, LicenseRequestDeleted
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository

logger = logging.getLogger(__name__)


def default_valid_until():
    return utc_today() + timedelta(days=settings.LICENSE_DEFAULT_VALIDITY_DAYS)


def default_features(features):
    return dict(settings.LICENSE_DEFAULT_FEATURES) if features is None else features


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        request_repository: LicenseRequestRepository,
        event_bus: Optional[EventBus] = None,
        key_prefix: Optional[str] = None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.request_repository = request_repository
        self.event_bus = event_bus or default_event_bus
        self.key_prefix = key_prefix or settings.LICENSE_KEY_PREFIX

    async def handle(self, command: CreateLicenseCommand) -> License:
        """
        Handle create license command.

        A pending request for the same domain is superseded by the new
        license and removed.

        Raises:
            DuplicateDomainError: If the domain already has a license
            ValueError: If the email or domain is invalid
        """
        Email(command.email)
        domain = normalize_domain(command.domain)

        if await self.license_repository.find_by_domain(domain):
            raise DuplicateDomainError(f"Domain {domain} already has a license")

        license = License.create(
            organization=command.organization,
            contact_person=command.contact_person,
            email=command.email,
            domain=domain,
            valid_until=command.valid_until or default_valid_until(),
            features=default_features(command.features),
            phone_number=command.phone_number,
            note=command.note,
            key_prefix=self.key_prefix,
        )
        license = await self.license_repository.save(license)
        licenses_created_total.labels(source="manual").inc()
        logger.info("License created", extra={"license_id": license.id, "domain": domain})

        pending = await self.request_repository.find_by_domain(domain)
        if pending:
            await self.request_repository.delete(pending.id)
            await self.event_bus.publish(LicenseRequestDeleted(pending.id, reason="superseded"))

        await self.event_bus.publish(LicenseCreated(license.id, domain=domain, source="manual"))
        return license
