"""
PushChangeHandler.

Sends one local change to the remote store.
"""
import logging
from typing import Optional

from core.domain.exceptions import SyncException, UnknownActionError
from core.metrics import sync_pushes_total
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository
from sync.application.commands.sync_commands import (
    DELETE_LICENSE,
    DELETE_REQUEST,
    PUSH_ACTIONS,
    PUSH_LICENSE,
    PushChangeCommand,
)
from sync.application.services.sync_settings_service import (
    RemoteStoreFactory,
    SyncSettingsService,
)
from sync.infrastructure.wire import encode_license, encode_request

logger = logging.getLogger(__name__)


class PushChangeHandler:
    """Handler for PushChangeCommand."""

    def __init__(
        self,
        settings_service: SyncSettingsService,
        remote_store_factory: RemoteStoreFactory,
        license_repository: LicenseRepository,
        request_repository: LicenseRequestRepository,
    ):
        """Initialize handler with repositories."""
        self.settings_service = settings_service
        self.remote_store_factory = remote_store_factory
        self.license_repository = license_repository
        self.request_repository = request_repository

    async def handle(self, command: PushChangeCommand) -> bool:
        """
        Handle push change command.

        Returns:
            True if the remote accepted the change, False if the push was
            skipped because sync is off or the row no longer exists

        Raises:
            UnknownActionError: If the action is not a push action
            InvalidSecretError: If the remote rejected the shared secret
            RemoteStoreError: If the remote could not be reached
        """
        if command.action not in PUSH_ACTIONS:
            raise UnknownActionError(f"Unknown push action: {command.action}")

        remote = await self.settings_service.remote_store(self.remote_store_factory)
        if remote is None:
            logger.debug("Sync not configured, push skipped", extra={"action": command.action})
            sync_pushes_total.labels(action=command.action, result="skipped").inc()
            return False

        payload = await self._payload(command)
        if payload is None:
            logger.info(
                "Object gone before push, skipped",
                extra={"action": command.action, "object_id": command.object_id},
            )
            sync_pushes_total.labels(action=command.action, result="skipped").inc()
            return False

        try:
            await remote.call(command.action, **payload)
        except SyncException:
            sync_pushes_total.labels(action=command.action, result="failure").inc()
            raise

        sync_pushes_total.labels(action=command.action, result="success").inc()
        logger.info(
            "Pushed change to remote store",
            extra={"action": command.action, "object_id": command.object_id},
        )
        return True

    async def _payload(self, command: PushChangeCommand) -> Optional[dict]:
        if command.action in (DELETE_LICENSE, DELETE_REQUEST):
            return {"id": command.object_id}
        if command.action == PUSH_LICENSE:
            license = await self.license_repository.find_by_id(command.object_id)
            return {"license": encode_license(license)} if license else None
        request = await self.request_repository.find_by_id(command.object_id)
        return {"request": encode_request(request)} if request else None
