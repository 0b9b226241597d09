"""
License and LicenseRequest models.
"""
from django.db import models
from django.utils import timezone

from core.domain.clock import utc_today


class License(models.Model):
    """
    A license binding a key and a set of enabled modules to one domain.

    ``updated_at`` is written by the domain layer, not by ``auto_now``,
    so that timestamps pulled from the remote store survive a save.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("suspended", "Suspended"),
    ]

    id = models.CharField(primary_key=True, max_length=64)
    organization = models.CharField(max_length=255)
    contact_person = models.CharField(max_length=255, blank=True)
    email = models.CharField(max_length=254, blank=True)
    phone_number = models.CharField(max_length=64, blank=True, default="")
    domain = models.CharField(max_length=255, db_index=True)
    key = models.CharField(max_length=100, unique=True, db_index=True)
    valid_until = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    features = models.JSONField(default=dict, blank=True)
    note = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="licenses_status_6f0c1e_idx"),
            models.Index(fields=["valid_until"], name="licenses_valid_u_3b9d2a_idx"),
        ]

    def __str__(self):
        return f"{self.organization} ({self.domain})"

    @property
    def is_expired(self) -> bool:
        return utc_today() > self.valid_until

    @property
    def effective_status(self) -> str:
        if self.status == "suspended":
            return "suspended"
        return "expired" if self.is_expired else "active"

    @property
    def days_remaining(self) -> int:
        return max(0, (self.valid_until - utc_today()).days)


class LicenseRequest(models.Model):
    """A pending registration for a domain without a license."""

    id = models.CharField(primary_key=True, max_length=64)
    organization = models.CharField(max_length=255)
    contact_person = models.CharField(max_length=255, blank=True)
    email = models.CharField(max_length=254, blank=True)
    phone_number = models.CharField(max_length=64, blank=True, default="")
    requested_domain = models.CharField(max_length=255, db_index=True)
    request_date = models.DateTimeField(default=timezone.now)
    note = models.TextField(blank=True, default="")
    custom_message = models.TextField(
        blank=True,
        default="",
        help_text="Returned to the installation while the request is pending",
    )
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "license_requests"
        ordering = ["-request_date"]
        verbose_name = "license request"

    def __str__(self):
        return f"{self.organization} ({self.requested_domain})"
