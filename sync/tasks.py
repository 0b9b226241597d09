"""
Celery tasks for the sync engine.

The pull runs on the beat schedule; pushes are queued by the domain
event handlers after each local change.
"""
import logging

from asgiref.sync import async_to_sync

from LicenseManagerService.celery import app

from core.domain.exceptions import InvalidSecretError, RemoteStoreError, SyncNotConfiguredError
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from sync.application.commands.sync_commands import PushChangeCommand
from sync.application.handlers.pull_from_remote_handler import PullFromRemoteHandler
from sync.application.handlers.push_change_handler import PushChangeHandler
from sync.application.services.sync_settings_service import SyncSettingsService
from sync.infrastructure.http_remote_store import HttpRemoteStore
from sync.infrastructure.repositories.django_setting_repository import DjangoSettingRepository
from verification.infrastructure.repositories.django_api_log_repository import (
    DjangoApiLogRepository,
)

logger = logging.getLogger(__name__)


def build_pull_handler() -> PullFromRemoteHandler:
    return PullFromRemoteHandler(
        settings_service=SyncSettingsService(DjangoSettingRepository()),
        remote_store_factory=HttpRemoteStore,
        license_repository=DjangoLicenseRepository(),
        request_repository=DjangoLicenseRequestRepository(),
        api_log_repository=DjangoApiLogRepository(),
    )


def build_push_handler() -> PushChangeHandler:
    return PushChangeHandler(
        settings_service=SyncSettingsService(DjangoSettingRepository()),
        remote_store_factory=HttpRemoteStore,
        license_repository=DjangoLicenseRepository(),
        request_repository=DjangoLicenseRequestRepository(),
    )


@app.task
def pull_from_remote_task():
    """
    Celery task for the periodic pull.

    A missing remote URL is a silent no-op. Failures are logged and left
    to the next scheduled run.
    """
    try:
        report = async_to_sync(build_pull_handler().handle)()
    except SyncNotConfiguredError:
        logger.debug("Sync not configured, pull skipped")
        return None
    except (InvalidSecretError, RemoteStoreError) as e:
        logger.warning("Pull from remote store failed: %s", e.message, extra={"code": e.code})
        return None
    return report.to_dict()


@app.task(bind=True, max_retries=3)
def push_change_task(self, action: str, object_id: str):
    """
    Celery task for pushing one change.

    Args:
        action: Push action, e.g. ``push_license``
        object_id: Id of the license or request
    """
    try:
        return async_to_sync(build_push_handler().handle)(PushChangeCommand(action, object_id))
    except InvalidSecretError:
        logger.error(
            "Remote store rejected the shared secret, push dropped",
            extra={"action": action, "object_id": object_id},
        )
        return False
    except RemoteStoreError as exc:
        logger.warning(
            "Push failed, retrying: %s",
            exc.message,
            extra={"action": action, "object_id": object_id, "retry": self.request.retries},
        )
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)
