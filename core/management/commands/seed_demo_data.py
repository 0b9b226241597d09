"""
Django management command to create demo data for development.

Creates:
- A superuser (admin/admin)
- An active demo license
- A pending license request
"""

import logging

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from core.domain.exceptions import DuplicateDomainError
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.license_requests import CreateRequestCommand
from licenses.application.handlers.create_license_handler import CreateLicenseHandler
from licenses.application.handlers.license_request_handlers import CreateRequestHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_license_request_repository import (
    DjangoLicenseRequestRepository,
)

logger = logging.getLogger(__name__)
User = get_user_model()


class Command(BaseCommand):
    """Command to create demo data."""

    help = "Create demo data (superuser, license, pending request)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--skip-superuser",
            action="store_true",
            help="Skip creating superuser",
        )
        parser.add_argument(
            "--license-domain",
            default="demo.example.com",
            help="Domain of the demo license (default: demo.example.com)",
        )
        parser.add_argument(
            "--request-domain",
            default="pending.example.com",
            help="Domain of the demo request (default: pending.example.com)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not options["skip_superuser"]:
            self.create_superuser()

        license_repo = DjangoLicenseRepository()
        request_repo = DjangoLicenseRequestRepository()

        try:
            license = async_to_sync(CreateLicenseHandler(license_repo, request_repo).handle)(
                CreateLicenseCommand(
                    organization="Demo Fire Brigade",
                    contact_person="Dana Demo",
                    email="dana@demo.example.com",
                    domain=options["license_domain"],
                    features={"inventory": True, "respiratory": True, "hoses": True},
                    note="Demo license",
                )
            )
            self.stdout.write(
                self.style.SUCCESS(f"Created license {license.key} for {license.domain}")
            )
        except DuplicateDomainError as e:
            self.stdout.write(self.style.WARNING(e.message))

        try:
            request = async_to_sync(
                CreateRequestHandler(request_repo, license_repository=license_repo).handle
            )(
                CreateRequestCommand(
                    organization="Pending Volunteers",
                    contact_person="Pat Pending",
                    email="pat@pending.example.com",
                    requested_domain=options["request_domain"],
                    custom_message="Thanks for registering, we will be in touch shortly.",
                )
            )
            self.stdout.write(
                self.style.SUCCESS(f"Created request {request.id} for {request.requested_domain}")
            )
        except DuplicateDomainError as e:
            self.stdout.write(self.style.WARNING(e.message))

        self.stdout.write("\nTry it:")
        self.stdout.write(
            f"   python manage.py simulate_verification --origin https://{options['license_domain']}"
        )
        self.stdout.write("   Admin: http://localhost:8000/admin/ (admin / admin)")

    def create_superuser(self):
        """Create a superuser if it doesn't exist."""
        username = "admin"
        password = "admin"

        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f"Superuser '{username}' already exists"))
            return

        User.objects.create_superuser(username=username, email="admin@example.com", password=password)
        self.stdout.write(self.style.SUCCESS(f"Created superuser: {username} / {password}"))
