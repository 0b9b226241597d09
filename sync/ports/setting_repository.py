"""
Setting repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional


class SettingRepository(ABC):
    """Key/value store for runtime settings."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Stored value, or None when the key was never saved."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Insert or replace a value."""

    @abstractmethod
    async def all(self) -> Dict[str, str]:
        """Every stored setting."""
