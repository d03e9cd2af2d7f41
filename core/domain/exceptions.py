"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Negative validation
outcomes (expired, inactive, device mismatch, ...) are NOT
exceptions: they are reported through ValidationResult.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when required input is missing or invalid."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class UserNotFoundError(LicenseException):
    """Raised when a user is not assigned to a license."""

    def __init__(self, message: str = "User not found in license"):
        super().__init__(message, code="USER_NOT_FOUND")


class DuplicateUserError(LicenseException):
    """Raised when a username is already assigned to a license."""

    def __init__(self, message: str = "User already exists in this license"):
        super().__init__(message, code="DUPLICATE_USER")


class PersistenceError(DomainException):
    """Raised when the license registry cannot be read or written."""

    def __init__(self, message: str = "License registry persistence failed"):
        super().__init__(message, code="INTERNAL_ERROR")
