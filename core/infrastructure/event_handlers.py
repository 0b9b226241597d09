"""
Event handlers for domain events.

Audit logging for every event, and queuing of remote pushes for
license and request changes.
"""

import logging
from typing import Dict, Optional, Type

from asgiref.sync import sync_to_async
from django.db import transaction

from catalog.domain.events import ModuleAdded, ModuleDeleted
from core.domain.events import DomainEvent, EventBus, EventHandler
from licenses.domain.events import (
    LicenseCreated,
    LicenseDeleted,
    LicenseReactivated,
    LicenseRequestCreated,
    LicenseRequestDeleted,
    LicenseRequestUpdated,
    LicenseRevoked,
    LicenseUpdated,
)
from sync.application.commands.sync_commands import (
    DELETE_LICENSE,
    DELETE_REQUEST,
    PUSH_LICENSE,
    PUSH_REQUEST,
    UPDATE_REQUEST,
)

logger = logging.getLogger(__name__)

PUSH_ACTION_BY_EVENT: Dict[Type[DomainEvent], str] = {
    LicenseCreated: PUSH_LICENSE,
    LicenseUpdated: PUSH_LICENSE,
    LicenseRevoked: PUSH_LICENSE,
    LicenseReactivated: PUSH_LICENSE,
    LicenseDeleted: DELETE_LICENSE,
    LicenseRequestCreated: PUSH_REQUEST,
    LicenseRequestUpdated: UPDATE_REQUEST,
    LicenseRequestDeleted: DELETE_REQUEST,
}

AUDITED_EVENTS = tuple(PUSH_ACTION_BY_EVENT) + (ModuleAdded, ModuleDeleted)

_registered = False


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the audit log stream."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class RemotePushEventHandler(EventHandler):
    """
    Queues a push of the changed license or request.

    The task is queued once the surrounding transaction commits, so the
    worker always finds the saved row. It loads the row when it runs, so
    only the action and the id travel through the broker.
    """

    async def handle(self, event: DomainEvent) -> None:
        action = PUSH_ACTION_BY_EVENT.get(type(event))
        if action is None:
            return
        await sync_to_async(_queue_push_on_commit)(action, event.aggregate_id)
        logger.debug(
            "Push queued", extra={"action": action, "object_id": event.aggregate_id}
        )


def _queue_push_on_commit(action: str, object_id: str) -> None:
    from sync.tasks import push_change_task

    transaction.on_commit(lambda: push_change_task.delay(action, object_id), robust=True)


def register_event_handlers(bus: Optional[EventBus] = None) -> None:
    """Register all event handlers with the event bus."""
    global _registered
    from core.infrastructure.events import event_bus

    if bus is None:
        if _registered:
            return
        bus = event_bus
        _registered = True

    audit_handler = AuditLogEventHandler()
    push_handler = RemotePushEventHandler()

    for event_type in AUDITED_EVENTS:
        bus.subscribe(event_type, audit_handler)
    for event_type in PUSH_ACTION_BY_EVENT:
        bus.subscribe(event_type, push_handler)

    logger.info("Event handlers registered")
