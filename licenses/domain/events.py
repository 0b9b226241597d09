"""
License domain events.

Domain events represent something that happened in the license domain.
The sync module listens to them to push changes to the remote store.
"""

from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseCreated(DomainEvent):
    """Event raised when a license is issued, manually or by approval."""

    domain: str = ""
    source: str = "manual"


@dataclass(frozen=True)
class LicenseUpdated(DomainEvent):
    """Event raised when license details or features change."""

    changed_fields: tuple = ()


@dataclass(frozen=True)
class LicenseRevoked(DomainEvent):
    """Event raised when a license is suspended."""


@dataclass(frozen=True)
class LicenseReactivated(DomainEvent):
    """Event raised when a suspended license is made active again."""


@dataclass(frozen=True)
class LicenseDeleted(DomainEvent):
    """Event raised when a license is removed."""


@dataclass(frozen=True)
class LicenseRequestCreated(DomainEvent):
    """Event raised when a license request is recorded."""

    domain: str = ""
    automatic: bool = False


@dataclass(frozen=True)
class LicenseRequestUpdated(DomainEvent):
    """Event raised when a license request is edited."""


@dataclass(frozen=True)
class LicenseRequestDeleted(DomainEvent):
    """Event raised when a request is approved away or rejected."""

    reason: str = "rejected"
