"""
License request handlers.

Handlers for creating, editing, approving and rejecting requests.
"""
import logging
from typing import Optional

from django.conf import settings

from core.domain.events import EventBus
from core.domain.exceptions import DuplicateDomainError, LicenseRequestNotFoundError
from core.domain.value_objects import Email, normalize_domain
from core.infrastructure.events import event_bus as default_event_bus
from core.metrics import license_requests_created_total, licenses_created_total
from licenses.application.commands.license_requests import (
    ApproveRequestCommand,
    CreateRequestCommand,
    RejectRequestCommand,
    UpdateRequestCommand,
)
from licenses.application.handlers.create_license_handler import (
    default_features,
    default_valid_until,
)
from licenses.domain.events import (
    LicenseCreated,
    LicenseRequestCreated,
    LicenseRequestDeleted,
    LicenseRequestUpdated,
)
from licenses.domain.license import License
from licenses.domain.license_request import LicenseRequest
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository

logger = logging.getLogger(__name__)


class _RequestCommandHandler:
    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        license_repository: Optional[LicenseRepository] = None,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.request_repository = request_repository
        self.license_repository = license_repository
        self.event_bus = event_bus or default_event_bus

    async def _get(self, request_id: str) -> LicenseRequest:
        request = await self.request_repository.find_by_id(request_id)
        if not request:
            raise LicenseRequestNotFoundError(f"License request {request_id} not found")
        return request


class CreateRequestHandler(_RequestCommandHandler):
    """Handler for CreateRequestCommand."""

    async def handle(self, command: CreateRequestCommand) -> LicenseRequest:
        """
        Handle create request command.

        Raises:
            DuplicateDomainError: If the domain has a license or a pending request
            ValueError: If the email or domain is invalid
        """
        Email(command.email)
        domain = normalize_domain(command.requested_domain)
        if self.license_repository and await self.license_repository.find_by_domain(domain):
            raise DuplicateDomainError(f"Domain {domain} already has a license")
        if await self.request_repository.find_by_domain(domain):
            raise DuplicateDomainError(f"Domain {domain} already has a pending request")

        request = await self.request_repository.save(
            LicenseRequest.create(
                organization=command.organization,
                contact_person=command.contact_person,
                email=command.email,
                requested_domain=domain,
                phone_number=command.phone_number,
                note=command.note,
                custom_message=command.custom_message,
            )
        )
        license_requests_created_total.labels(source="manual").inc()
        await self.event_bus.publish(LicenseRequestCreated(request.id, domain=domain))
        return request


class UpdateRequestHandler(_RequestCommandHandler):
    """Handler for UpdateRequestCommand."""

    async def handle(self, command: UpdateRequestCommand) -> LicenseRequest:
        request = await self._get(command.request_id)
        if command.changes.get("email"):
            Email(command.changes["email"])
        updated = await self.request_repository.save(request.update_details(**command.changes))
        await self.event_bus.publish(LicenseRequestUpdated(updated.id))
        return updated


class ApproveRequestHandler(_RequestCommandHandler):
    """Handler for ApproveRequestCommand."""

    def __init__(
        self,
        request_repository: LicenseRequestRepository,
        license_repository: LicenseRepository,
        event_bus: Optional[EventBus] = None,
        key_prefix: Optional[str] = None,
    ):
        super().__init__(request_repository, license_repository, event_bus)
        self.key_prefix = key_prefix or settings.LICENSE_KEY_PREFIX

    async def handle(self, command: ApproveRequestCommand) -> License:
        """
        Handle approve request command.

        Issues an active license for the requested domain and deletes
        the request.

        Raises:
            LicenseRequestNotFoundError: If request not found
            DuplicateDomainError: If the domain was licensed in the meantime
        """
        request = await self._get(command.request_id)
        if await self.license_repository.find_by_domain(request.requested_domain):
            raise DuplicateDomainError(
                f"Domain {request.requested_domain} already has a license"
            )

        license = request.approve(
            valid_until=command.valid_until or default_valid_until(),
            features=default_features(command.features),
            key_prefix=self.key_prefix,
            overrides=command.overrides,
        )
        Email(license.email)
        license = await self.license_repository.save(license)
        await self.request_repository.delete(request.id)
        licenses_created_total.labels(source="approval").inc()
        logger.info(
            "License request approved",
            extra={"request_id": request.id, "license_id": license.id, "domain": license.domain},
        )

        await self.event_bus.publish(
            LicenseCreated(license.id, domain=license.domain, source="approval")
        )
        await self.event_bus.publish(LicenseRequestDeleted(request.id, reason="approved"))
        return license


class RejectRequestHandler(_RequestCommandHandler):
    """Handler for RejectRequestCommand."""

    async def handle(self, command: RejectRequestCommand) -> None:
        if not await self.request_repository.delete(command.request_id):
            raise LicenseRequestNotFoundError(f"License request {command.request_id} not found")
        logger.info("License request rejected", extra={"request_id": command.request_id})
        await self.event_bus.publish(LicenseRequestDeleted(command.request_id, reason="rejected"))
