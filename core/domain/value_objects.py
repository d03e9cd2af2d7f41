"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from enum import Enum


class ValidationReason(Enum):
    """
    Closed set of reasons a license validation can fail.

    The value is the message reported to clients; the member name
    is the machine-readable code.
    """

    MISSING_INPUT = "Required input not provided"
    NOT_FOUND = "License not found"
    EXPIRED = "License expired"
    INACTIVE = "License is inactive"
    DEVICE_MISMATCH = "License is bound to a different device"
    NO_USERS_ASSIGNED = "No users assigned to this license"
    USER_NOT_ASSIGNED = "User not assigned to this license"
    USER_INACTIVE = "User is deactivated"

    @property
    def code(self) -> str:
        """Return the machine-readable code."""
        return self.name

    def __str__(self) -> str:
        """Return reason message as string."""
        return self.value
