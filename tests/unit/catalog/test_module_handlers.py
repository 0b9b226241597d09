"""
Unit tests for the module catalog.
"""

import pytest

from catalog.application.commands.module_commands import AddModuleCommand, DeleteModuleCommand
from catalog.application.handlers.module_handlers import (
    AddModuleHandler,
    DeleteModuleHandler,
    ListModulesHandler,
)
from catalog.application.services.catalog_cache_service import CatalogCacheService
from catalog.domain.events import ModuleAdded, ModuleDeleted
from catalog.domain.module_definition import DEFAULT_ICON, ModuleDefinition
from core.domain.exceptions import DuplicateModuleError, ModuleNotFoundError


class TestModuleDefinition:
    """Tests for ModuleDefinition entity."""

    def test_describe(self):
        module = ModuleDefinition("fleet", "Fleet", "Vehicles", "Truck")
        assert module.describe(True) == {
            "technicalName": "fleet",
            "title": "Fleet",
            "description": "Vehicles",
            "iconName": "Truck",
            "active": True,
        }

    def test_default_icon(self):
        assert ModuleDefinition("fleet", "Fleet").icon_name == DEFAULT_ICON

    def test_label_required(self):
        with pytest.raises(ValueError):
            ModuleDefinition("fleet", "  ")


@pytest.mark.asyncio
class TestModuleHandlers:
    """Tests for catalog handlers."""

    async def test_add_module(self, module_repo, event_bus):
        """Test adding a module to the catalog."""
        module = await AddModuleHandler(module_repo, event_bus).handle(
            AddModuleCommand(id=" drones ", label=" Drones ", icon_name="")
        )

        assert module.id == "drones"
        assert module.label == "Drones"
        assert module.icon_name == DEFAULT_ICON
        assert await module_repo.find_by_id("drones") == module
        assert event_bus.of_type(ModuleAdded)[0].aggregate_id == "drones"

    async def test_add_duplicate(self, module_repo, event_bus):
        with pytest.raises(DuplicateModuleError, match="Module ID already exists"):
            await AddModuleHandler(module_repo, event_bus).handle(
                AddModuleCommand(id="inventory", label="Again")
            )

    async def test_add_invalid_id(self, module_repo, event_bus):
        with pytest.raises(ValueError):
            await AddModuleHandler(module_repo, event_bus).handle(
                AddModuleCommand(id="has space", label="Bad")
            )

    async def test_delete_module(self, module_repo, event_bus):
        await DeleteModuleHandler(module_repo, event_bus).handle(DeleteModuleCommand(id="hoses"))

        assert await module_repo.find_by_id("hoses") is None
        assert event_bus.of_type(ModuleDeleted)[0].aggregate_id == "hoses"

    async def test_delete_missing(self, module_repo, event_bus):
        with pytest.raises(ModuleNotFoundError):
            await DeleteModuleHandler(module_repo, event_bus).handle(
                DeleteModuleCommand(id="nothing")
            )

    async def test_changes_invalidate_cached_catalog(self, module_repo, event_bus):
        """Test that the cached catalog reflects adds and deletes."""
        listing = ListModulesHandler(module_repo)
        before = await listing.handle()

        await AddModuleHandler(module_repo, event_bus).handle(
            AddModuleCommand(id="drones", label="Drones")
        )
        after_add = await listing.handle()
        await DeleteModuleHandler(module_repo, event_bus).handle(DeleteModuleCommand(id="drones"))
        after_delete = await listing.handle()

        assert "drones" not in [m.id for m in before]
        assert "drones" in [m.id for m in after_add]
        assert [m.id for m in after_delete] == [m.id for m in before]

    async def test_catalog_is_served_from_cache(self, module_repo):
        """Test that a direct repository change is not seen until invalidation."""
        await CatalogCacheService.get_modules(module_repo)
        await module_repo.delete("hoses")

        cached = await CatalogCacheService.get_modules(module_repo)
        assert "hoses" in [m.id for m in cached]

        await CatalogCacheService.invalidate()
        fresh = await CatalogCacheService.get_modules(module_repo)
        assert "hoses" not in [m.id for m in fresh]
