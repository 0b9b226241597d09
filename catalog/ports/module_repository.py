"""
Module repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.domain.module_definition import ModuleDefinition


class ModuleRepository(ABC):
    """Abstract repository for ModuleDefinition entities."""

    @abstractmethod
    async def save(self, module: ModuleDefinition) -> ModuleDefinition:
        """Insert or update a module definition."""

    @abstractmethod
    async def find_by_id(self, module_id: str) -> Optional[ModuleDefinition]:
        """Find a module by its technical name."""

    @abstractmethod
    async def find_all(self) -> List[ModuleDefinition]:
        """List the catalog in display order."""

    @abstractmethod
    async def delete(self, module_id: str) -> bool:
        """
        Delete a module definition.

        Returns:
            True if a row was removed
        """
