"""
License lifecycle handlers.

Handlers for update, feature toggle, revoke, reactivate and delete
commands. Each publishes a domain event after the change is stored.
"""
import logging
from typing import Optional

from core.domain.events import EventBus
from core.domain.exceptions import DuplicateDomainError, LicenseNotFoundError
from core.domain.value_objects import Email, normalize_domain
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import licenses_revoked_total
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.revoke_license import (
    ReactivateLicenseCommand,
    RevokeLicenseCommand,
)
from licenses.application.commands.update_license import (
    UpdateLicenseCommand,
    UpdateLicenseFeaturesCommand,
)
from licenses.domain.events import (
    LicenseDeleted,
    LicenseReactivated,
    LicenseRevoked,
    LicenseUpdated,
)
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class _LicenseCommandHandler:
    def __init__(
        self,
        license_repository: LicenseRepository,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.event_bus = event_bus or default_event_bus

    async def _get(self, license_id: str) -> License:
        license = await self.license_repository.find_by_id(license_id)
        if not license:
            raise LicenseNotFoundError(f"License {license_id} not found")
        return license


class UpdateLicenseHandler(_LicenseCommandHandler):
    """Handler for UpdateLicenseCommand."""

    async def handle(self, command: UpdateLicenseCommand) -> License:
        """
        Handle update license command.

        Raises:
            LicenseNotFoundError: If license not found
            DuplicateDomainError: If the new domain belongs to another license
            ValueError: If a field value is invalid
        """
        license = await self._get(command.license_id)
        changes = dict(command.changes)

        if "email" in changes:
            Email(changes["email"])
        if "domain" in changes:
            domain = normalize_domain(changes["domain"])
            other = await self.license_repository.find_by_domain(domain)
            if other and other.id != license.id:
                raise DuplicateDomainError(f"Domain {domain} already has a license")

        updated = await self.license_repository.save(license.update_details(**changes))
        await self.event_bus.publish(
            LicenseUpdated(updated.id, changed_fields=tuple(sorted(changes)))
        )
        return updated


class UpdateLicenseFeaturesHandler(_LicenseCommandHandler):
    """Handler for UpdateLicenseFeaturesCommand."""

    async def handle(self, command: UpdateLicenseFeaturesCommand) -> License:
        license = await self._get(command.license_id)
        updated = await self.license_repository.save(license.with_features(command.features))
        await self.event_bus.publish(LicenseUpdated(updated.id, changed_fields=("features",)))
        return updated


class RevokeLicenseHandler(_LicenseCommandHandler):
    """Handler for RevokeLicenseCommand."""

    async def handle(self, command: RevokeLicenseCommand) -> License:
        """
        Handle revoke license command.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self._get(command.license_id)
        revoked = await self.license_repository.save(license.revoke())
        licenses_revoked_total.inc()
        logger.info("License revoked", extra={"license_id": revoked.id, "domain": revoked.domain})
        await self.event_bus.publish(LicenseRevoked(revoked.id))
        return revoked


class ReactivateLicenseHandler(_LicenseCommandHandler):
    """Handler for ReactivateLicenseCommand."""

    async def handle(self, command: ReactivateLicenseCommand) -> License:
        license = await self._get(command.license_id)
        reactivated = await self.license_repository.save(license.reactivate())
        await self.event_bus.publish(LicenseReactivated(reactivated.id))
        return reactivated


class DeleteLicenseHandler(_LicenseCommandHandler):
    """Handler for DeleteLicenseCommand."""

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Raises:
            LicenseNotFoundError: If license not found
        """
        if not await self.license_repository.delete(command.license_id):
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        logger.info("License deleted", extra={"license_id": command.license_id})
        await self.event_bus.publish(LicenseDeleted(command.license_id))
