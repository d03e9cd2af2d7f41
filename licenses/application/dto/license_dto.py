"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from core.domain.value_objects import ValidationReason
from licenses.domain.user import UserAssignment


@dataclass
class LicenseStatsDTO:
    """DTO for registry statistics."""

    total: int
    active: int
    inactive: int
    expired: int
    expiring_in_30_days: int
    available: int


@dataclass
class LicenseUsersDTO:
    """DTO for a license's user roster."""

    license_key: str
    customer_id: str
    users: List[UserAssignment]


@dataclass
class KeyValidationDTO:
    """DTO for a validation by license key."""

    valid: bool
    reason: Optional[ValidationReason] = None
    customer_id: Optional[str] = None
    expiration_date: Optional[datetime] = None
    type: Optional[str] = None


@dataclass
class DeviceValidationDTO:
    """DTO for a device-bound validation."""

    valid: bool
    reason: Optional[ValidationReason] = None
    license_name: Optional[str] = None
    expiration_date: Optional[datetime] = None
    bound_device_id: Optional[str] = None
    remaining_days: Optional[int] = None


@dataclass
class UserValidationDTO:
    """DTO for a user login validation."""

    valid: bool
    reason: Optional[ValidationReason] = None
    customer_id: Optional[str] = None
    expiration_date: Optional[datetime] = None
    type: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None
