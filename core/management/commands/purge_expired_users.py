"""
Django management command to delete expired application users.

Users whose expiry lies strictly before now are removed; users with
unlimited expiry are never touched. Run it periodically (cron or a
scheduled task).
"""

import logging
import uuid

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from applications.infrastructure.models import Application as ApplicationModel
from users.infrastructure.models import AppUser as AppUserModel
from users.infrastructure.repositories.django_app_user_repository import (
    DjangoAppUserRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to delete expired application users."""

    help = "Delete application users whose expiry has passed"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--application",
            type=uuid.UUID,
            help="Only purge users of this application",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually delete users",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        now = timezone.now()

        # pylint: disable=no-member
        applications = ApplicationModel.objects.all()
        if options["application"]:
            applications = applications.filter(id=options["application"])
            if not applications.exists():
                raise CommandError(f"Application {options['application']} not found")

        repository = DjangoAppUserRepository()
        total = 0
        for application in applications:
            expired = AppUserModel.objects.filter(
                application_id=application.id, expiry__isnull=False, expiry__lt=now
            )
            if dry_run:
                count = expired.count()
                if count:
                    self.stdout.write(f"  - {application.name}: {count} expired user(s)")
                total += count
                continue

            deleted = async_to_sync(repository.delete_expired)(application.id, now)
            if deleted:
                logger.info("Purged %d expired user(s) of application %s", deleted, application.id)
            total += deleted

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"DRY RUN - {total} user(s) would be deleted"))
            return

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Deleted {total} expired user(s)"))
