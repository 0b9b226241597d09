"""
Sync settings service.

Reads the remote endpoint and the shared secret from the settings
table, falling back to Django settings for the secret.
"""
import logging
from typing import Callable, Dict, Optional

from django.conf import settings

from sync.domain.setting_keys import ADMIN_SECRET, API_URL
from sync.ports.remote_store import RemoteStore
from sync.ports.setting_repository import SettingRepository

logger = logging.getLogger(__name__)

RemoteStoreFactory = Callable[[str, str], RemoteStore]


class SyncSettingsService:
    """Access to runtime settings used by the sync engine."""

    def __init__(self, setting_repository: SettingRepository):
        self.setting_repository = setting_repository

    async def get(self, key: str) -> Optional[str]:
        return await self.setting_repository.get(key)

    async def save(self, key: str, value: str) -> None:
        key = (key or "").strip()
        if not key or len(key) > 100:
            raise ValueError("Setting key must be 1 to 100 characters")
        await self.setting_repository.set(key, "" if value is None else str(value).strip())
        logger.info("Setting saved", extra={"setting_key": key})

    async def all(self) -> Dict[str, str]:
        return await self.setting_repository.all()

    async def admin_secret(self) -> str:
        return await self.get(ADMIN_SECRET) or settings.LICENSE_ADMIN_SECRET

    async def api_url(self) -> str:
        return (await self.get(API_URL) or "").strip()

    async def remote_store(self, factory: RemoteStoreFactory) -> Optional[RemoteStore]:
        """Remote client for the configured endpoint, or None when sync is off."""
        api_url = await self.api_url()
        if not api_url:
            return None
        return factory(api_url, await self.admin_secret())
