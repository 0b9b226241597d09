"""
Django admin configuration for the API log.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from verification.infrastructure.models import ApiLogEntry


@admin.register(ApiLogEntry)
class ApiLogEntryAdmin(admin.ModelAdmin):
    """Read-only view of verification calls."""

    list_display = ["timestamp", "source_url", "provided_key", "status_display", "endpoint"]
    list_filter = ["response_status", "method"]
    search_fields = ["source_url", "provided_key", "response_body"]
    date_hierarchy = "timestamp"
    readonly_fields = [
        "id",
        "timestamp",
        "method",
        "endpoint",
        "source_url",
        "provided_key",
        "response_status",
        "pretty_body",
    ]
    exclude = ["response_body"]

    def status_display(self, obj):
        color = "green" if obj.response_status < 300 else "red"
        return format_html('<span style="color: {};">{}</span>', color, obj.response_status)

    status_display.short_description = "Status"
    status_display.admin_order_field = "response_status"

    def pretty_body(self, obj):
        try:
            body = json.dumps(json.loads(obj.response_body), indent=2)
        except ValueError:
            body = obj.response_body
        return format_html("<pre>{}</pre>", body)

    pretty_body.short_description = "Response body"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
