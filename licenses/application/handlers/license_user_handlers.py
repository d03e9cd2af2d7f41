"""
License user roster handlers.
"""
import logging

from core.domain.exceptions import LicenseNotFoundError, ValidationError
from core.metrics import license_mutations_total
from licenses.application.commands.license_users import (
    AddUserCommand,
    RemoveUserCommand,
    SetUserActiveCommand,
)
from licenses.application.dto.license_dto import LicenseUsersDTO
from licenses.application.queries.list_license_users import ListLicenseUsersQuery
from licenses.domain.license import License
from licenses.domain.user import UserAssignment
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class _UserHandler:
    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def _get_license(self, license_hash: str) -> License:
        license = self.license_repository.find_by_hash(license_hash)
        if not license:
            raise LicenseNotFoundError()
        return license


class AddUserHandler(_UserHandler):
    """Handler for AddUserCommand."""

    def handle(self, command: AddUserCommand) -> UserAssignment:
        """
        Assign a user to a license.

        Returns:
            The new UserAssignment

        Raises:
            LicenseNotFoundError: If license not found
            DuplicateUserError: If the username is already assigned
            ValidationError: If the username is blank
        """
        with self.license_repository.transaction():
            license = self._get_license(command.license_hash)
            updated = license.add_user(command.username, command.role)
            self.license_repository.save(command.license_hash, updated)

        license_mutations_total.labels(operation="add_user").inc()
        logger.info("User %s added to license", command.username, extra={"license_hash": command.license_hash})
        return updated.users[-1]


class SetUserActiveHandler(_UserHandler):
    """Handler for SetUserActiveCommand."""

    def handle(self, command: SetUserActiveCommand) -> UserAssignment:
        """
        Activate or deactivate an assigned user.

        Raises:
            ValidationError: If is_active is not a boolean
            LicenseNotFoundError: If license not found
            UserNotFoundError: If the user is not assigned
        """
        if not isinstance(command.is_active, bool):
            raise ValidationError("isActive must be a boolean")

        with self.license_repository.transaction():
            license = self._get_license(command.license_hash)
            updated = license.set_user_active(command.username, command.is_active)
            self.license_repository.save(command.license_hash, updated)

        operation = "activate_user" if command.is_active else "deactivate_user"
        license_mutations_total.labels(operation=operation).inc()
        logger.info(
            "User %s %s",
            command.username,
            "activated" if command.is_active else "deactivated",
            extra={"license_hash": command.license_hash},
        )
        return updated.find_user(command.username)


class RemoveUserHandler(_UserHandler):
    """Handler for RemoveUserCommand."""

    def handle(self, command: RemoveUserCommand) -> None:
        """
        Remove a user from a license.

        Raises:
            LicenseNotFoundError: If license not found
            UserNotFoundError: If the user is not assigned
        """
        with self.license_repository.transaction():
            license = self._get_license(command.license_hash)
            self.license_repository.save(command.license_hash, license.remove_user(command.username))

        license_mutations_total.labels(operation="remove_user").inc()
        logger.info("User %s removed from license", command.username, extra={"license_hash": command.license_hash})


class ListLicenseUsersHandler(_UserHandler):
    """Handler for ListLicenseUsersQuery."""

    def handle(self, query: ListLicenseUsersQuery) -> LicenseUsersDTO:
        """
        List the users assigned to a license.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = self._get_license(query.license_hash)
        return LicenseUsersDTO(
            license_key=license.key,
            customer_id=license.customer_id,
            users=list(license.users),
        )
