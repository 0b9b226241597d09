"""
Django admin configuration for the catalog app.
"""

from asgiref.sync import async_to_sync
from django.contrib import admin, messages

from catalog.application.commands.module_commands import AddModuleCommand, DeleteModuleCommand
from catalog.application.handlers.module_handlers import AddModuleHandler, DeleteModuleHandler
from catalog.application.services.catalog_cache_service import CatalogCacheService
from catalog.infrastructure.models import ModuleDefinition
from catalog.infrastructure.repositories.django_module_repository import DjangoModuleRepository
from core.domain.exceptions import DomainException


@admin.register(ModuleDefinition)
class ModuleDefinitionAdmin(admin.ModelAdmin):
    """Admin interface for the module catalog."""

    list_display = ["id", "label", "icon_name", "position"]
    list_editable = ["position"]
    search_fields = ["id", "label", "description"]
    ordering = ["position", "id"]

    def get_readonly_fields(self, request, obj=None):
        """The technical name is the key licenses refer to."""
        return ["id"] if obj else []

    def save_model(self, request, obj, form, change):
        if change:
            super().save_model(request, obj, form, change)
            async_to_sync(CatalogCacheService.invalidate)()
            return
        try:
            async_to_sync(AddModuleHandler(DjangoModuleRepository()).handle)(
                AddModuleCommand(
                    id=obj.id,
                    label=obj.label,
                    description=obj.description,
                    icon_name=obj.icon_name,
                )
            )
        except (DomainException, ValueError) as e:
            self.message_user(request, str(e), level=messages.ERROR)

    def delete_model(self, request, obj):
        async_to_sync(DeleteModuleHandler(DjangoModuleRepository()).handle)(
            DeleteModuleCommand(id=obj.id)
        )

    def delete_queryset(self, request, queryset):
        for obj in queryset:
            self.delete_model(request, obj)
