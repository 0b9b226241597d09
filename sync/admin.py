"""
Django admin configuration for sync settings.
"""

from asgiref.sync import async_to_sync
from django.contrib import admin, messages

from core.domain.exceptions import SyncException
from sync.domain.setting_keys import SECRET_KEYS, mask_secret
from sync.infrastructure.models import Setting
from sync.tasks import build_pull_handler


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    """Admin interface for runtime settings."""

    list_display = ["key", "display_value", "updated_at"]
    search_fields = ["key"]
    readonly_fields = ["updated_at"]
    actions = ["sync_now"]

    def display_value(self, obj):
        if obj.key in SECRET_KEYS:
            return mask_secret(obj.value)
        return obj.value

    display_value.short_description = "Value"

    @admin.action(description="Sync now (pull from remote store)")
    def sync_now(self, request, queryset):
        try:
            report = async_to_sync(build_pull_handler().handle)()
        except SyncException as e:
            self.message_user(request, f"Sync failed: {e.message}", level=messages.ERROR)
            return
        self.message_user(
            request,
            f"Sync complete, {report.changed} row(s) changed.",
            level=messages.SUCCESS,
        )
