"""
ModuleDefinition model.
"""
from django.db import models


class ModuleDefinition(models.Model):
    """A licensable module of the downstream product."""

    id = models.CharField(primary_key=True, max_length=64, help_text="Technical name, e.g. apiAccess")
    label = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    icon_name = models.CharField(max_length=64, default="Box")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "modules"
        ordering = ["position", "id"]
        verbose_name = "module"

    def __str__(self):
        return f"{self.label} ({self.id})"
