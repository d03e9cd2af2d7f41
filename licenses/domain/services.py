"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity. LicenseValidator implements the ordered
validation checks; the first failing check wins and a failed
validation never produces a changed license.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import ValidationReason
from licenses.domain.license import DEFAULT_LOGIN_HISTORY_LIMIT, License
from licenses.domain.user import UserAssignment


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a validation.

    On success `license` is the transitioned license that must be
    persisted; on failure it is the unchanged license (or None).
    """

    valid: bool
    reason: Optional[ValidationReason] = None
    license: Optional[License] = None
    user: Optional[UserAssignment] = None

    @classmethod
    def success(cls, license: License, user: Optional[UserAssignment] = None) -> "ValidationResult":
        return cls(valid=True, license=license, user=user)

    @classmethod
    def failure(cls, reason: ValidationReason, license: Optional[License] = None) -> "ValidationResult":
        return cls(valid=False, reason=reason, license=license)


class LicenseValidator:
    """Domain service for license validation."""

    @staticmethod
    def has_input(*values: Optional[str]) -> bool:
        """Check that every required input is a non-blank string."""
        return all(isinstance(value, str) and value.strip() for value in values)

    @staticmethod
    def check_status(
        license: Optional[License], current_time: Optional[datetime] = None
    ) -> Optional[ValidationReason]:
        """
        Run the existence, expiration and activation checks in order.

        Args:
            license: License entity or None if the key is unknown
            current_time: Current time (defaults to utcnow)

        Returns:
            The first failing reason, or None if the license is usable
        """
        if license is None:
            return ValidationReason.NOT_FOUND
        if license.is_expired(current_time):
            return ValidationReason.EXPIRED
        if not license.is_active:
            return ValidationReason.INACTIVE
        return None

    @staticmethod
    def validate_key(
        license: Optional[License], current_time: Optional[datetime] = None
    ) -> ValidationResult:
        """Validate a license by key; success counts one usage."""
        reason = LicenseValidator.check_status(license, current_time)
        if reason:
            return ValidationResult.failure(reason, license)
        return ValidationResult.success(license.record_usage())

    @staticmethod
    def validate_device(
        license: Optional[License],
        device_id: str,
        current_time: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Validate a license for a device.

        An unbound license is bound to the device on success; a license
        bound to another device fails with DEVICE_MISMATCH.
        """
        reason = LicenseValidator.check_status(license, current_time)
        if reason:
            return ValidationResult.failure(reason, license)
        if not license.accepts_device(device_id):
            return ValidationResult.failure(ValidationReason.DEVICE_MISMATCH, license)
        return ValidationResult.success(license.bind_device(device_id))

    @staticmethod
    def validate_user(
        license: Optional[License],
        username: str,
        current_time: Optional[datetime] = None,
        history_limit: int = DEFAULT_LOGIN_HISTORY_LIMIT,
    ) -> ValidationResult:
        """
        Validate a user login against a license.

        Success records the login in the bounded history and counts
        one usage. Failed logins are not recorded.
        """
        reason = LicenseValidator.check_status(license, current_time)
        if reason:
            return ValidationResult.failure(reason, license)
        if not license.users:
            return ValidationResult.failure(ValidationReason.NO_USERS_ASSIGNED, license)

        user = license.find_user(username)
        if user is None:
            return ValidationResult.failure(ValidationReason.USER_NOT_ASSIGNED, license)
        if not user.is_active:
            return ValidationResult.failure(ValidationReason.USER_INACTIVE, license)

        updated = license.record_login(username, current_time, limit=history_limit).record_usage()
        return ValidationResult.success(updated, user=user)
