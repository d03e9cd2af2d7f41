"""
License validation handlers.

Each handler runs the ordered checks of LicenseValidator and persists
the transitioned license only when the validation succeeded.
"""

import logging
from datetime import datetime
from typing import Callable

from core.domain.value_objects import ValidationReason
from core.metrics import license_validations_total
from licenses.application.commands.validate_license import (
    ValidateLicenseCommand,
    VerifyDeviceLicenseCommand,
    VerifyUserLicenseCommand,
)
from licenses.application.dto.license_dto import (
    DeviceValidationDTO,
    KeyValidationDTO,
    UserValidationDTO,
)
from licenses.domain.license import DEFAULT_LOGIN_HISTORY_LIMIT, utcnow
from licenses.domain.license_key import hash_license_key
from licenses.domain.services import LicenseValidator, ValidationResult
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

DEFAULT_LICENSE_NAME = "VetCare License"


def _record_outcome(operation: str, result: ValidationResult) -> None:
    outcome = "valid" if result.valid else result.reason.code.lower()
    license_validations_total.labels(operation=operation, outcome=outcome).inc()
    if not result.valid:
        logger.info("Validation %s failed: %s", operation, result.reason.code)


class _ValidationHandler:
    """Shared wiring for validation handlers."""

    operation = "validate"

    def __init__(
        self,
        license_repository: LicenseRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize handler with repository and time source."""
        self.license_repository = license_repository
        self.clock = clock

    def _persist(self, license_key: str, result: ValidationResult) -> None:
        if result.valid:
            self.license_repository.save(hash_license_key(license_key), result.license)
        _record_outcome(self.operation, result)


class ValidateLicenseHandler(_ValidationHandler):
    """Handler for ValidateLicenseCommand."""

    operation = "key"

    def handle(self, command: ValidateLicenseCommand) -> KeyValidationDTO:
        """
        Validate a license key.

        Checks, in order: key provided, license exists, not expired,
        active. Success increments the usage counter.

        Args:
            command: ValidateLicenseCommand

        Returns:
            KeyValidationDTO

        Raises:
            PersistenceError: If the successful validation cannot be saved
        """
        if not LicenseValidator.has_input(command.license_key):
            result = ValidationResult.failure(ValidationReason.MISSING_INPUT)
            _record_outcome(self.operation, result)
            return KeyValidationDTO(valid=False, reason=result.reason)

        with self.license_repository.transaction():
            license = self.license_repository.find_by_key(command.license_key)
            result = LicenseValidator.validate_key(license, self.clock())
            self._persist(command.license_key, result)

        if not result.valid:
            return KeyValidationDTO(valid=False, reason=result.reason)
        return KeyValidationDTO(
            valid=True,
            customer_id=result.license.customer_id,
            expiration_date=result.license.expiration_date,
            type=result.license.type,
        )


class VerifyDeviceLicenseHandler(_ValidationHandler):
    """Handler for VerifyDeviceLicenseCommand."""

    operation = "device"

    def __init__(
        self,
        license_repository: LicenseRepository,
        clock: Callable[[], datetime] = utcnow,
        default_license_name: str = DEFAULT_LICENSE_NAME,
    ):
        super().__init__(license_repository, clock)
        self.default_license_name = default_license_name

    def handle(self, command: VerifyDeviceLicenseCommand) -> DeviceValidationDTO:
        """
        Validate a license for a device.

        The first successful call binds the license to the device;
        afterwards only that device passes.

        Args:
            command: VerifyDeviceLicenseCommand

        Returns:
            DeviceValidationDTO

        Raises:
            PersistenceError: If the successful validation cannot be saved
        """
        if not LicenseValidator.has_input(command.license_key, command.device_id):
            result = ValidationResult.failure(ValidationReason.MISSING_INPUT)
            _record_outcome(self.operation, result)
            return DeviceValidationDTO(valid=False, reason=result.reason)

        now = self.clock()
        with self.license_repository.transaction():
            license = self.license_repository.find_by_key(command.license_key)
            result = LicenseValidator.validate_device(license, command.device_id, now)
            self._persist(command.license_key, result)

        if not result.valid:
            return DeviceValidationDTO(valid=False, reason=result.reason)

        if license.bound_device_id is None:
            logger.info(
                "License bound to device %s",
                command.device_id,
                extra={"license_hash": result.license.hash},
            )
        return DeviceValidationDTO(
            valid=True,
            license_name=result.license.name or self.default_license_name,
            expiration_date=result.license.expiration_date,
            bound_device_id=result.license.bound_device_id,
            remaining_days=result.license.remaining_days(now),
        )


class VerifyUserLicenseHandler(_ValidationHandler):
    """Handler for VerifyUserLicenseCommand."""

    operation = "user"

    def __init__(
        self,
        license_repository: LicenseRepository,
        clock: Callable[[], datetime] = utcnow,
        history_limit: int = DEFAULT_LOGIN_HISTORY_LIMIT,
    ):
        super().__init__(license_repository, clock)
        self.history_limit = history_limit

    def handle(self, command: VerifyUserLicenseCommand) -> UserValidationDTO:
        """
        Validate a user login against a license.

        Args:
            command: VerifyUserLicenseCommand

        Returns:
            UserValidationDTO

        Raises:
            PersistenceError: If the successful validation cannot be saved
        """
        if not LicenseValidator.has_input(command.username, command.license_key):
            result = ValidationResult.failure(ValidationReason.MISSING_INPUT)
            _record_outcome(self.operation, result)
            return UserValidationDTO(valid=False, reason=result.reason)

        with self.license_repository.transaction():
            license = self.license_repository.find_by_key(command.license_key)
            result = LicenseValidator.validate_user(
                license, command.username, self.clock(), history_limit=self.history_limit
            )
            self._persist(command.license_key, result)

        if not result.valid:
            return UserValidationDTO(valid=False, reason=result.reason)
        return UserValidationDTO(
            valid=True,
            customer_id=result.license.customer_id,
            expiration_date=result.license.expiration_date,
            type=result.license.type,
            username=result.user.username,
            role=result.user.role,
        )
