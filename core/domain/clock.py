"""
Time helpers shared by the domain.

All timestamps are timezone-aware UTC. Validity is evaluated against the
UTC calendar date.
"""
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()
