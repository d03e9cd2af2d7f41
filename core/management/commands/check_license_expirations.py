"""
Django management command to report expired and soon-expiring licenses.

This command should be run periodically (e.g., via cron or scheduled task).
It only reads the registry; nothing is modified.
"""

import logging

from django.conf import settings
from django.core.management.base import BaseCommand

from licenses.domain.license import utcnow
from licenses.infrastructure.registry_provider import get_license_registry

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to list expired and soon-expiring licenses."""

    help = "Report expired licenses and licenses expiring within the next N days"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=settings.EXPIRING_SOON_DAYS,
            help="Report licenses expiring within this many days",
        )
        parser.add_argument(
            "--include-inactive",
            action="store_true",
            help="Also report deactivated licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        days = options["days"]
        include_inactive = options["include_inactive"]
        now = utcnow()

        expired = []
        expiring = []
        for license in get_license_registry().list_all():
            if not license.is_active and not include_inactive:
                continue
            days_left = license.days_until_expiry(now)
            if days_left < 0:
                expired.append(license)
            elif days_left <= days:
                expiring.append(license)

        self.stdout.write(f"Found {len(expired)} expired license(s)")
        for license in expired:
            self.stdout.write(
                f"  - {license.key} ({license.customer_id}) expired at "
                f"{license.expiration_date.isoformat()}"
            )

        self.stdout.write(f"Found {len(expiring)} license(s) expiring within {days} days")
        for license in expiring:
            self.stdout.write(
                f"  - {license.key} ({license.customer_id}) expires in "
                f"{license.remaining_days(now)} day(s)"
            )

        logger.info(
            "Expiration check complete",
            extra={"expired": len(expired), "expiring": len(expiring), "days": days},
        )
        if not expired and not expiring:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS("No licenses need attention"))
