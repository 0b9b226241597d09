"""
Module catalog handlers.

Removing a module leaves existing license feature maps untouched;
verification only reports modules that are still in the catalog.
"""
import logging
from typing import List, Optional

from catalog.application.commands.module_commands import AddModuleCommand, DeleteModuleCommand
from catalog.application.services.catalog_cache_service import CatalogCacheService
from catalog.domain.events import ModuleAdded, ModuleDeleted
from catalog.domain.module_definition import ModuleDefinition
from catalog.ports.module_repository import ModuleRepository
from core.domain.events import EventBus
from core.domain.exceptions import DuplicateModuleError, ModuleNotFoundError
from core.infrastructure.events import event_bus as default_event_bus

logger = logging.getLogger(__name__)


class AddModuleHandler:
    """Handler for AddModuleCommand."""

    def __init__(self, module_repository: ModuleRepository, event_bus: Optional[EventBus] = None):
        """Initialize handler with repositories."""
        self.module_repository = module_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: AddModuleCommand) -> ModuleDefinition:
        """
        Handle add module command.

        Raises:
            DuplicateModuleError: If the id is already in the catalog
            ValueError: If the id or label is invalid
        """
        module = ModuleDefinition(
            id=command.id.strip(),
            label=command.label.strip(),
            description=command.description or "",
            icon_name=command.icon_name or "Box",
        )
        if await self.module_repository.find_by_id(module.id):
            raise DuplicateModuleError()

        module = await self.module_repository.save(module)
        await CatalogCacheService.invalidate()
        logger.info("Module added", extra={"module_id": module.id})
        await self.event_bus.publish(ModuleAdded(module.id))
        return module


class DeleteModuleHandler:
    """Handler for DeleteModuleCommand."""

    def __init__(self, module_repository: ModuleRepository, event_bus: Optional[EventBus] = None):
        """Initialize handler with repositories."""
        self.module_repository = module_repository
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: DeleteModuleCommand) -> None:
        """
        Handle delete module command.

        Raises:
            ModuleNotFoundError: If the id is not in the catalog
        """
        if not await self.module_repository.delete(command.id):
            raise ModuleNotFoundError(f"Module {command.id} not found")
        await CatalogCacheService.invalidate()
        logger.info("Module deleted", extra={"module_id": command.id})
        await self.event_bus.publish(ModuleDeleted(command.id))


class ListModulesHandler:
    """Returns the cached catalog."""

    def __init__(self, module_repository: ModuleRepository):
        self.module_repository = module_repository

    async def handle(self) -> List[ModuleDefinition]:
        return await CatalogCacheService.get_modules(self.module_repository)
