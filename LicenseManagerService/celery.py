"""
Celery configuration for background tasks.

Used for pushing local changes to the remote store and for the
periodic pull that keeps the local store in sync.
"""
import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseManagerService.settings.dev")

app = Celery("LicenseManagerService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
