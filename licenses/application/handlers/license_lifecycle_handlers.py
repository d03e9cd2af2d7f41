"""
License lifecycle handlers.

Handlers for activate/deactivate, extend, and delete license commands.
"""
import logging

from core.domain.exceptions import LicenseNotFoundError, ValidationError
from core.metrics import license_mutations_total
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.commands.set_license_active import SetLicenseActiveCommand
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class SetLicenseActiveHandler:
    """Handler for SetLicenseActiveCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def handle(self, command: SetLicenseActiveCommand) -> License:
        """
        Handle activate/deactivate license command.

        Args:
            command: SetLicenseActiveCommand

        Returns:
            Updated License entity

        Raises:
            LicenseNotFoundError: If license not found
        """
        with self.license_repository.transaction():
            license = self.license_repository.find_by_hash(command.license_hash)
            if not license:
                raise LicenseNotFoundError()
            updated = self.license_repository.save(
                command.license_hash, license.set_active(command.active)
            )

        operation = "activate" if command.active else "deactivate"
        license_mutations_total.labels(operation=operation).inc()
        logger.info("License %sd", operation, extra={"license_hash": command.license_hash})
        return updated


class ExtendLicenseHandler:
    """Handler for ExtendLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def handle(self, command: ExtendLicenseCommand) -> License:
        """
        Handle extend license command.

        Args:
            command: ExtendLicenseCommand

        Returns:
            Extended License entity

        Raises:
            ValidationError: If days_to_add is not a positive integer
            LicenseNotFoundError: If license not found
        """
        days = command.days_to_add
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise ValidationError("License hash and positive daysToAdd are required")

        with self.license_repository.transaction():
            license = self.license_repository.find_by_hash(command.license_hash)
            if not license:
                raise LicenseNotFoundError()
            extended = self.license_repository.save(command.license_hash, license.extend(days))

        license_mutations_total.labels(operation="extend").inc()
        logger.info(
            "License extended by %d days",
            days,
            extra={
                "license_hash": command.license_hash,
                "expiration_date": extended.expiration_date.isoformat(),
            },
        )
        return extended


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Raises:
            LicenseNotFoundError: If license not found
        """
        with self.license_repository.transaction():
            if not self.license_repository.delete(command.license_hash):
                raise LicenseNotFoundError()

        license_mutations_total.labels(operation="delete").inc()
        logger.info("License deleted", extra={"license_hash": command.license_hash})
