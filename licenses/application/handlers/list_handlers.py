"""
Handlers for the license and request listing queries.
"""

from typing import List

from core.domain.clock import utc_today
from core.domain.value_objects import LicenseStatus
from licenses.application.queries.list_licenses import ListLicensesQuery, ListRequestsQuery
from licenses.domain.license import License
from licenses.domain.license_request import LicenseRequest
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[License]:
        """
        Handle list licenses query.

        Raises:
            ValueError: If the status filter is not a known status
        """
        wanted = LicenseStatus(query.status) if query.status else None
        licenses = await self.license_repository.find_all(search=query.search)
        if wanted is None:
            return licenses
        today = utc_today()
        return [license for license in licenses if license.effective_status(today) is wanted]


class ListRequestsHandler:
    """Handler for ListRequestsQuery."""

    def __init__(self, request_repository: LicenseRequestRepository):
        """Initialize handler with repositories."""
        self.request_repository = request_repository

    async def handle(self, query: ListRequestsQuery) -> List[LicenseRequest]:
        requests = await self.request_repository.find_all()
        if not query.search:
            return requests
        needle = query.search.lower()
        return [
            request
            for request in requests
            if needle in request.organization.lower() or needle in request.requested_domain
        ]
