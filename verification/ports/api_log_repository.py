"""
API log repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List

from verification.domain.api_log_entry import ApiLogEntry


class ApiLogRepository(ABC):
    """
    Abstract repository for ApiLogEntry entities.

    The log is append-only: there is no update and no delete.
    """

    @abstractmethod
    async def append(self, entry: ApiLogEntry) -> ApiLogEntry:
        """Store a new entry."""

    @abstractmethod
    async def exists(self, entry_id: str) -> bool:
        """Check if an entry with this id is stored."""

    @abstractmethod
    async def recent(self, limit: int = 100) -> List[ApiLogEntry]:
        """Latest entries, newest first."""
