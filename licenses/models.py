"""
Model registry for the licenses app.

The models live in the infrastructure layer; importing them here lets
Django discover them for migrations.
"""
from licenses.infrastructure.models import License, LicenseRequest  # noqa: F401
