"""
ModuleDefinition domain entity.

One licensable feature of the downstream product. A license switches
modules on and off by id.
"""
from dataclasses import dataclass
from typing import Dict, Union

from core.domain.value_objects import ModuleId

DEFAULT_ICON = "Box"


@dataclass(frozen=True)
class ModuleDefinition:
    """
    ModuleDefinition domain entity.

    ``icon_name`` is a free-form icon reference understood by the
    installation's UI.
    """

    id: str
    label: str
    description: str = ""
    icon_name: str = DEFAULT_ICON

    def __post_init__(self):
        """Validate module definition."""
        ModuleId(self.id)
        if not self.label or not self.label.strip():
            raise ValueError("Module label cannot be empty")

    def describe(self, active: bool) -> Dict[str, Union[str, bool]]:
        """Rich module entry as returned by the verification API."""
        return {
            "technicalName": self.id,
            "title": self.label,
            "description": self.description,
            "iconName": self.icon_name,
            "active": active,
        }


DEFAULT_MODULES = (
    ModuleDefinition("inventory", "Basic inventory", "Equipment and storage location management", "Server"),
    ModuleDefinition("respiratory", "Respiratory protection", "Breathing apparatus workshop and inspections", "Wind"),
    ModuleDefinition("hoses", "Hose maintenance", "Hose washing and testing", "Droplet"),
    ModuleDefinition("vehicles", "Vehicle logbook", "Digital logbook and refuelling", "Truck"),
    ModuleDefinition("apiAccess", "API access", "Access for external systems", "Database"),
    ModuleDefinition("personnel", "Personnel", "Crew management and training courses", "Users"),
)
