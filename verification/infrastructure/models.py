"""
ApiLogEntry model.
"""
from django.db import models
from django.utils import timezone


class ApiLogEntry(models.Model):
    """Append-only record of a verification call."""

    id = models.CharField(primary_key=True, max_length=64)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    method = models.CharField(max_length=10, default="POST")
    endpoint = models.CharField(max_length=255)
    source_url = models.CharField(max_length=255, db_index=True, help_text="Normalized calling domain")
    provided_key = models.TextField(blank=True, default="")
    response_status = models.PositiveSmallIntegerField()
    response_body = models.TextField(blank=True, default="")

    class Meta:
        db_table = "api_logs"
        ordering = ["-timestamp"]
        verbose_name = "API log entry"
        verbose_name_plural = "API log"

    def __str__(self):
        return f"{self.timestamp:%Y-%m-%d %H:%M:%S} {self.source_url} {self.response_status}"
