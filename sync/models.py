"""
Model registry for the sync app.
"""
from sync.infrastructure.models import Setting  # noqa: F401
