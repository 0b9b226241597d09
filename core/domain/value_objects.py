"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional

UNKNOWN_DOMAIN = "unknown"

_SCHEME_RE = re.compile(r"^https?://")
_MODULE_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def normalize_domain(raw: Optional[str]) -> str:
    """
    Reduce an origin, referer or user-typed URL to a bare host name.

    Lower-cases and trims the input, strips an http(s) scheme, then drops
    any path and port. Empty input yields "unknown".

    >>> normalize_domain("https://App.Example.com:8443/login")
    'app.example.com'
    """
    if not raw:
        return UNKNOWN_DOMAIN
    host = _SCHEME_RE.sub("", raw.strip().lower())
    host = host.split("/", 1)[0]
    host = host.split(":", 1)[0]
    return host or UNKNOWN_DOMAIN


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class DomainName(ValueObject):
    """Normalized host name a license is bound to."""

    value: str

    def __post_init__(self):
        object.__setattr__(self, "value", normalize_domain(self.value))

    @classmethod
    def from_origin(cls, origin: Optional[str], referer: Optional[str] = None) -> "DomainName":
        """Build from the Origin header, falling back to the Referer."""
        return cls(origin or referer or "")

    @property
    def is_known(self) -> bool:
        return self.value != UNKNOWN_DOMAIN

    def matches(self, other: str) -> bool:
        return self.value == normalize_domain(other)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ModuleId(ValueObject):
    """Technical name of a licensable module, e.g. ``apiAccess``."""

    value: str

    def __post_init__(self):
        """Validate module id format."""
        if not self.value:
            raise ValueError("Module id cannot be empty")
        if len(self.value) > 64 or not _MODULE_ID_RE.match(self.value):
            raise ValueError(f"Invalid module id format: {self.value}")

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """
    License status value object.

    Only ACTIVE and SUSPENDED are stored. EXPIRED is derived from the
    validity date at read time.
    """

    ACTIVE = "active"
    SUSPENDED = "suspended"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value

    @classmethod
    def stored(cls, value: str) -> "LicenseStatus":
        """Parse a persisted status, rejecting the derived EXPIRED value."""
        status = cls(value)
        if status is cls.EXPIRED:
            raise ValueError("Expired is derived from valid_until and cannot be stored")
        return status
