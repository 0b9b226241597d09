"""
Model registry for the verification app.
"""
from verification.infrastructure.models import ApiLogEntry  # noqa: F401
