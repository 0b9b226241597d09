"""
Model registry for the catalog app.
"""
from catalog.infrastructure.models import ModuleDefinition  # noqa: F401
