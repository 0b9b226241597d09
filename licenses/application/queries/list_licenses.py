"""
Read-side queries for licenses and requests.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """
    Query to list licenses, newest first.

    ``status`` filters on the effective status, so "expired" is accepted
    even though it is never stored.
    """

    status: Optional[str] = None
    search: Optional[str] = None


@dataclass
class ListRequestsQuery:
    """Query to list pending requests, newest first."""

    search: Optional[str] = None
