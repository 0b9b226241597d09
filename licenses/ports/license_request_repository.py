"""
LicenseRequest repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from licenses.domain.license_request import LicenseRequest


class LicenseRequestRepository(ABC):
    """Abstract repository for LicenseRequest entities."""

    @abstractmethod
    async def save(self, request: LicenseRequest) -> LicenseRequest:
        """Insert or update a request."""

    @abstractmethod
    async def find_by_id(self, request_id: str) -> Optional[LicenseRequest]:
        """Find a request by ID."""

    @abstractmethod
    async def find_by_domain(self, domain: str) -> Optional[LicenseRequest]:
        """Find the pending request for a normalized domain (case-insensitive)."""

    @abstractmethod
    async def find_all(self) -> List[LicenseRequest]:
        """List requests, newest first."""

    @abstractmethod
    async def delete(self, request_id: str) -> bool:
        """
        Delete a request.

        Returns:
            True if a row was removed
        """
