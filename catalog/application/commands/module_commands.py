"""
Commands for editing the module catalog.
"""

from dataclasses import dataclass


@dataclass
class AddModuleCommand:
    """Command to add a module to the catalog."""

    id: str
    label: str
    description: str = ""
    icon_name: str = "Box"


@dataclass
class DeleteModuleCommand:
    """Command to remove a module from the catalog."""

    id: str
