"""
PullFromRemoteHandler.

Fetches licenses, requests and logs from the remote store and merges
them into the local store with last-writer-wins. Local rows the remote
does not know about are kept.
"""
import logging
from typing import Any, Iterable, Optional

from core.domain.exceptions import SyncException, SyncNotConfiguredError
from core.metrics import sync_pulls_total
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository
from sync.application.services.sync_settings_service import (
    RemoteStoreFactory,
    SyncSettingsService,
)
from sync.domain.merge import LastWriterWinsPolicy, MergeDecision, PullReport, TableReport
from sync.infrastructure.wire import decode_license, decode_log, decode_request
from verification.ports.api_log_repository import ApiLogRepository

logger = logging.getLogger(__name__)


def _rows(data: Any) -> Iterable[Any]:
    return data if isinstance(data, list) else []


class PullFromRemoteHandler:
    """Handler for a pull from the remote store."""

    def __init__(
        self,
        settings_service: SyncSettingsService,
        remote_store_factory: RemoteStoreFactory,
        license_repository: LicenseRepository,
        request_repository: LicenseRequestRepository,
        api_log_repository: ApiLogRepository,
        policy: Optional[LastWriterWinsPolicy] = None,
    ):
        """Initialize handler with repositories."""
        self.settings_service = settings_service
        self.remote_store_factory = remote_store_factory
        self.license_repository = license_repository
        self.request_repository = request_repository
        self.api_log_repository = api_log_repository
        self.policy = policy or LastWriterWinsPolicy()

    async def handle(self) -> PullReport:
        """
        Pull and merge.

        Returns:
            PullReport with per-table counts

        Raises:
            SyncNotConfiguredError: If no remote API URL is set
            InvalidSecretError: If the remote rejected the shared secret
            RemoteStoreError: If the remote could not be reached or answered with an error
        """
        remote = await self.settings_service.remote_store(self.remote_store_factory)
        if remote is None:
            raise SyncNotConfiguredError()

        try:
            data = await remote.call("sync_admin")
        except SyncException:
            sync_pulls_total.labels(result="failure").inc()
            raise

        report = PullReport()
        for row in _rows(data.get("licenses")):
            await self._merge_license(row, report.licenses)
        for row in _rows(data.get("requests")):
            await self._merge_request(row, report.requests)
        for row in _rows(data.get("logs")):
            await self._merge_log(row, report.logs)

        sync_pulls_total.labels(result="success").inc()
        logger.info("Pulled from remote store", extra={"report": report.to_dict()})
        return report

    async def _merge_license(self, row: Any, table: TableReport) -> None:
        try:
            remote, stamp = decode_license(row)
        except ValueError as e:
            logger.warning("Skipping malformed remote license: %s", e)
            table.skipped += 1
            return

        holder = await self.license_repository.find_by_key(remote.key)
        if holder and holder.id != remote.id:
            logger.warning(
                "Skipping remote license with a key held by another license",
                extra={"license_id": remote.id, "holder_id": holder.id},
            )
            table.skipped += 1
            return

        local = await self.license_repository.find_by_id(remote.id)
        decision = self.policy.decide(
            local.updated_at if local else None, stamp, exists_locally=local is not None
        )
        if decision is not MergeDecision.KEEP:
            await self.license_repository.save(remote)
        table.count(decision)

    async def _merge_request(self, row: Any, table: TableReport) -> None:
        try:
            remote, stamp = decode_request(row)
        except ValueError as e:
            logger.warning("Skipping malformed remote request: %s", e)
            table.skipped += 1
            return

        local = await self.request_repository.find_by_id(remote.id)
        decision = self.policy.decide(
            local.updated_at if local else None, stamp, exists_locally=local is not None
        )
        if decision is not MergeDecision.KEEP:
            await self.request_repository.save(remote)
        table.count(decision)

    async def _merge_log(self, row: Any, table: TableReport) -> None:
        try:
            entry = decode_log(row)
        except ValueError as e:
            logger.warning("Skipping malformed remote log entry: %s", e)
            table.skipped += 1
            return

        if await self.api_log_repository.exists(entry.id):
            table.skipped += 1
            return
        await self.api_log_repository.append(entry)
        table.inserted += 1
