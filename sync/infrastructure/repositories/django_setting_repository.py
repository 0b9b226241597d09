"""
Django implementation of SettingRepository port.
"""
from typing import Dict, Optional

from asgiref.sync import sync_to_async
from django.utils import timezone

from sync.infrastructure.models import Setting
from sync.ports.setting_repository import SettingRepository


class DjangoSettingRepository(SettingRepository):
    """Django ORM implementation of SettingRepository."""

    @sync_to_async
    def get(self, key: str) -> Optional[str]:
        return Setting.objects.filter(key=key).values_list("value", flat=True).first()

    @sync_to_async
    def set(self, key: str, value: str) -> None:
        Setting.objects.update_or_create(
            key=key, defaults={"value": value or "", "updated_at": timezone.now()}
        )

    @sync_to_async
    def all(self) -> Dict[str, str]:
        return dict(Setting.objects.values_list("key", "value"))
