"""
Django management command to pull from the remote store now.
"""

import json

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import SyncException
from sync.tasks import build_pull_handler


class Command(BaseCommand):
    """Command to run one pull from the remote store."""

    help = "Pull licenses, requests and logs from the configured remote store"

    def handle(self, *args, **options):
        """Execute the command."""
        try:
            report = async_to_sync(build_pull_handler().handle)()
        except SyncException as e:
            raise CommandError(e.message) from e

        self.stdout.write(self.style.SUCCESS(f"Sync complete, {report.changed} row(s) changed"))
        self.stdout.write(json.dumps(report.to_dict(), indent=2))
