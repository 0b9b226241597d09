"""
Django management command that plays an installation calling the
verification API.

Runs the same handler the public endpoint uses, so the call is logged
and unknown domains get an automatic request.
"""

import json

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from catalog.infrastructure.repositories.django_module_repository import DjangoModuleRepository
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)
from verification.application.commands.verify_license import VerifyLicenseCommand
from verification.application.handlers.verify_license_handler import VerifyLicenseHandler
from verification.infrastructure.repositories.django_api_log_repository import (
    DjangoApiLogRepository,
)


class Command(BaseCommand):
    """Command to send a simulated verification request."""

    help = "Simulate an installation verifying its license"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--origin",
            required=True,
            help="Origin of the calling installation, e.g. https://shop.example.com",
        )
        parser.add_argument("--key", default=None, help="License key to present")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = VerifyLicenseHandler(
            license_repository=DjangoLicenseRepository(),
            request_repository=DjangoLicenseRequestRepository(),
            module_repository=DjangoModuleRepository(),
            api_log_repository=DjangoApiLogRepository(),
        )
        result = async_to_sync(handler.handle)(
            VerifyLicenseCommand(
                origin=options["origin"],
                key=options["key"],
                endpoint="console",
            )
        )

        style = self.style.ERROR if result.is_error else self.style.SUCCESS
        self.stdout.write(style(f"HTTP {result.http_status} ({result.outcome.value})"))
        self.stdout.write(json.dumps(result.body, indent=2))
