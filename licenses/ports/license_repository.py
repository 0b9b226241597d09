"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Insert or update a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """

    @abstractmethod
    async def find_by_id(self, license_id: str) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License id

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by its exact key.

        Args:
            key: License key as handed to the installation

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def find_by_domain(self, domain: str) -> Optional[License]:
        """
        Find the license bound to a normalized domain (case-insensitive).

        Returns the oldest match if sync imported duplicates.
        """

    @abstractmethod
    async def find_all(self, status: Optional[str] = None, search: Optional[str] = None) -> List[License]:
        """
        List licenses, newest first.

        Args:
            status: Stored status to filter on
            search: Substring matched against organization, domain and key
        """

    @abstractmethod
    async def delete(self, license_id: str) -> bool:
        """
        Delete a license.

        Returns:
            True if a row was removed
        """

    @abstractmethod
    async def exists(self, license_id: str) -> bool:
        """Check if a license exists."""
