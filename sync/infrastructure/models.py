"""
Setting model.
"""
from django.db import models
from django.utils import timezone


class Setting(models.Model):
    """Runtime key/value setting, e.g. the remote API URL."""

    key = models.CharField(primary_key=True, max_length=100)
    value = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "settings"
        ordering = ["key"]

    def __str__(self):
        return self.key
