"""
Catalog domain events.
"""

from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class ModuleAdded(DomainEvent):
    """Event raised when a module is added to the catalog."""


@dataclass(frozen=True)
class ModuleDeleted(DomainEvent):
    """Event raised when a module is removed from the catalog."""
