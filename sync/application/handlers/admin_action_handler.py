"""
AdminActionHandler.

Serves the RPC-style admin actions a dashboard client or a peer
instance sends with the shared secret. Changes are written straight to
the repositories without publishing domain events, so a change applied
here is never pushed back out.
"""
import logging
import secrets
from typing import Any, Awaitable, Callable, Dict, Optional

from django.conf import settings

from catalog.application.commands.module_commands import AddModuleCommand, DeleteModuleCommand
from catalog.application.handlers.module_handlers import (
    AddModuleHandler,
    DeleteModuleHandler,
    ListModulesHandler,
)
from catalog.ports.module_repository import ModuleRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    DomainException,
    DuplicateDomainError,
    InvalidSecretError,
    LicenseNotFoundError,
    LicenseRequestNotFoundError,
    UnknownActionError,
)
from core.metrics import admin_actions_total
from licenses.application.handlers.list_handlers import ListLicensesHandler, ListRequestsHandler
from licenses.application.queries.list_licenses import ListLicensesQuery, ListRequestsQuery
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository
from sync.application.commands.sync_commands import AdminActionCommand
from sync.application.services.sync_settings_service import SyncSettingsService
from sync.infrastructure.wire import (
    decode_license,
    decode_module,
    decode_request,
    encode_license,
    encode_log,
    encode_module,
    encode_request,
)
from verification.ports.api_log_repository import ApiLogRepository

logger = logging.getLogger(__name__)

OK = {"status": "ok"}


def _require(payload: Dict[str, Any], name: str) -> Any:
    value = payload.get(name)
    if value in (None, ""):
        raise ValueError(f"Missing '{name}'")
    return value


class AdminActionHandler:
    """Handler for AdminActionCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        request_repository: LicenseRequestRepository,
        module_repository: ModuleRepository,
        api_log_repository: ApiLogRepository,
        settings_service: SyncSettingsService,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.request_repository = request_repository
        self.module_repository = module_repository
        self.api_log_repository = api_log_repository
        self.settings_service = settings_service
        self.event_bus = event_bus
        self._actions: Dict[str, Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]] = {
            "sync_admin": self._sync_admin,
            "get_licenses": self._get_licenses,
            "get_requests": self._get_requests,
            "get_logs": self._get_logs,
            "get_modules": self._get_modules,
            "create_license": self._create_license,
            "push_license": self._push_license,
            "update_license": self._update_license,
            "update_license_features": self._update_license_features,
            "revoke_license": self._revoke_license,
            "delete_license": self._delete_license,
            "push_request": self._push_request,
            "update_request": self._update_request,
            "delete_request": self._delete_request,
            "add_module": self._add_module,
            "delete_module": self._delete_module,
            "get_setting": self._get_setting,
            "save_setting": self._save_setting,
        }

    @property
    def actions(self):
        return tuple(self._actions)

    async def handle(self, command: AdminActionCommand) -> Dict[str, Any]:
        """
        Handle admin action command.

        Returns:
            JSON-ready response body

        Raises:
            InvalidSecretError: If the secret does not match
            UnknownActionError: If the action is not known
            DomainException: From the action itself
            ValueError: If the payload is malformed
        """
        action = command.action or ""
        expected = await self.settings_service.admin_secret()
        if not command.secret or not secrets.compare_digest(
            str(command.secret).encode(), expected.encode()
        ):
            admin_actions_total.labels(action=action or "none", result="denied").inc()
            logger.warning("Admin action with invalid secret", extra={"action": action})
            raise InvalidSecretError()

        method = self._actions.get(action)
        if method is None:
            admin_actions_total.labels(action="unknown", result="error").inc()
            raise UnknownActionError(f"Unknown action: {action}")

        try:
            result = await method(command.payload or {})
        except (DomainException, ValueError):
            admin_actions_total.labels(action=action, result="error").inc()
            raise

        admin_actions_total.labels(action=action, result="success").inc()
        return result

    # Reads

    async def _all_licenses(self, payload=None):
        payload = payload or {}
        query = ListLicensesQuery(status=payload.get("status"), search=payload.get("search"))
        licenses = await ListLicensesHandler(self.license_repository).handle(query)
        return [encode_license(license) for license in licenses]

    async def _all_requests(self, payload=None):
        query = ListRequestsQuery(search=(payload or {}).get("search"))
        requests = await ListRequestsHandler(self.request_repository).handle(query)
        return [encode_request(request) for request in requests]

    async def _sync_admin(self, payload):
        logs = await self.api_log_repository.recent(settings.LICENSE_SYNC_LOG_LIMIT)
        return {
            **OK,
            "licenses": await self._all_licenses(),
            "requests": await self._all_requests(),
            "logs": [encode_log(entry) for entry in logs],
        }

    async def _get_licenses(self, payload):
        return {**OK, "data": await self._all_licenses(payload)}

    async def _get_requests(self, payload):
        return {**OK, "data": await self._all_requests(payload)}

    async def _get_logs(self, payload):
        logs = await self.api_log_repository.recent(settings.LICENSE_LOG_PAGE_SIZE)
        return {**OK, "data": [encode_log(entry) for entry in logs]}

    async def _get_modules(self, payload):
        modules = await ListModulesHandler(self.module_repository).handle()
        return {**OK, "data": [encode_module(module) for module in modules]}

    async def _get_setting(self, payload):
        return {**OK, "value": await self.settings_service.get(_require(payload, "key"))}

    # Licenses

    async def _check_unique(self, license: License) -> None:
        other = await self.license_repository.find_by_domain(license.domain)
        if other and other.id != license.id:
            raise DuplicateDomainError(f"Domain {license.domain} already has a license")
        holder = await self.license_repository.find_by_key(license.key)
        if holder and holder.id != license.id:
            raise ValueError("License key already in use")

    async def _create_license(self, payload):
        license, _ = decode_license(_require(payload, "license"))
        await self._check_unique(license)
        await self.license_repository.save(license)
        logger.info("License stored by admin action", extra={"license_id": license.id})
        return dict(OK)

    async def _push_license(self, payload):
        license, _ = decode_license(_require(payload, "license"))
        holder = await self.license_repository.find_by_key(license.key)
        if holder and holder.id != license.id:
            raise ValueError("License key already in use")
        await self.license_repository.save(license)
        logger.info("License pushed by peer", extra={"license_id": license.id})
        return dict(OK)

    async def _update_license(self, payload):
        license, _ = decode_license(_require(payload, "license"))
        current = await self.license_repository.find_by_id(license.id)
        if current is None:
            raise LicenseNotFoundError(f"License {license.id} not found")
        await self._check_unique(license)
        await self.license_repository.save(license)
        return dict(OK)

    async def _update_license_features(self, payload):
        license_id = _require(payload, "id")
        features = payload.get("features")
        if not isinstance(features, dict):
            raise ValueError("'features' must be an object")
        license = await self.license_repository.find_by_id(license_id)
        if license is None:
            raise LicenseNotFoundError(f"License {license_id} not found")
        await self.license_repository.save(license.with_features(features))
        return dict(OK)

    async def _revoke_license(self, payload):
        license_id = _require(payload, "id")
        license = await self.license_repository.find_by_id(license_id)
        if license is None:
            raise LicenseNotFoundError(f"License {license_id} not found")
        await self.license_repository.save(license.revoke())
        logger.info("License revoked by admin action", extra={"license_id": license_id})
        return dict(OK)

    async def _delete_license(self, payload):
        await self.license_repository.delete(_require(payload, "id"))
        return dict(OK)

    # Requests

    async def _push_request(self, payload):
        request, _ = decode_request(_require(payload, "request"))
        await self.request_repository.save(request)
        return dict(OK)

    async def _update_request(self, payload):
        request, _ = decode_request(_require(payload, "request"))
        if await self.request_repository.find_by_id(request.id) is None:
            raise LicenseRequestNotFoundError(f"License request {request.id} not found")
        await self.request_repository.save(request)
        return dict(OK)

    async def _delete_request(self, payload):
        await self.request_repository.delete(_require(payload, "id"))
        return dict(OK)

    # Catalog and settings

    async def _add_module(self, payload):
        module = decode_module(_require(payload, "module"))
        await AddModuleHandler(self.module_repository, self.event_bus).handle(
            AddModuleCommand(
                id=module.id,
                label=module.label,
                description=module.description,
                icon_name=module.icon_name,
            )
        )
        return dict(OK)

    async def _delete_module(self, payload):
        await DeleteModuleHandler(self.module_repository, self.event_bus).handle(
            DeleteModuleCommand(id=_require(payload, "id"))
        )
        return dict(OK)

    async def _save_setting(self, payload):
        await self.settings_service.save(_require(payload, "key"), payload.get("value", ""))
        return dict(OK)
