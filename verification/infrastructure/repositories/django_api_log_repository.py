"""
Django implementation of ApiLogRepository port.
"""
from typing import List

from asgiref.sync import sync_to_async

from verification.domain.api_log_entry import ApiLogEntry
from verification.infrastructure.models import ApiLogEntry as ApiLogEntryModel
from verification.ports.api_log_repository import ApiLogRepository


class DjangoApiLogRepository(ApiLogRepository):
    """Django ORM implementation of ApiLogRepository."""

    def _to_domain(self, model: ApiLogEntryModel) -> ApiLogEntry:
        return ApiLogEntry(
            id=model.id,
            timestamp=model.timestamp,
            method=model.method,
            endpoint=model.endpoint,
            source_url=model.source_url,
            provided_key=model.provided_key,
            response_status=model.response_status,
            response_body=model.response_body,
        )

    @sync_to_async
    def append(self, entry: ApiLogEntry) -> ApiLogEntry:
        model = ApiLogEntryModel.objects.create(
            id=entry.id,
            timestamp=entry.timestamp,
            method=entry.method,
            endpoint=entry.endpoint,
            source_url=entry.source_url,
            provided_key=entry.provided_key,
            response_status=entry.response_status,
            response_body=entry.response_body,
        )
        return self._to_domain(model)

    @sync_to_async
    def exists(self, entry_id: str) -> bool:
        return ApiLogEntryModel.objects.filter(id=entry_id).exists()

    @sync_to_async
    def recent(self, limit: int = 100) -> List[ApiLogEntry]:
        return [
            self._to_domain(model)
            for model in ApiLogEntryModel.objects.order_by("-timestamp")[:limit]
        ]
