"""
IssueLicenseHandler.

Handles the issue license command.
"""

import logging

from core.metrics import licenses_issued_total
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.domain.license import License
from licenses.domain.license_key import DEFAULT_KEY_PREFIX
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, key_prefix: str = DEFAULT_KEY_PREFIX):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.key_prefix = key_prefix

    def handle(self, command: IssueLicenseCommand) -> License:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            Issued License entity (its hash is available as `license.hash`)

        Raises:
            ValidationError: If customer_id is blank or validity_days invalid
            PersistenceError: If the registry cannot be saved
        """
        license = License.create(
            customer_id=command.customer_id,
            license_type=command.license_type,
            validity_days=command.validity_days,
            name=command.name,
            key_prefix=self.key_prefix,
        )

        with self.license_repository.transaction():
            saved = self.license_repository.save(license.hash, license)

        licenses_issued_total.labels(type=saved.type).inc()
        logger.info(
            "Issued license for customer %s",
            saved.customer_id,
            extra={"license_hash": saved.hash, "validity_days": saved.validity_days},
        )
        return saved
