"""
License domain entity.

This is the core domain entity representing an issued license.
It contains business logic and is independent of infrastructure.
"""
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from core.domain.exceptions import DuplicateUserError, UserNotFoundError, ValidationError
from licenses.domain.license_key import DEFAULT_KEY_PREFIX, generate_license_key, hash_license_key
from licenses.domain.user import LoginAttempt, UserAssignment

DEFAULT_LICENSE_TYPE = "production"
DEFAULT_VALIDITY_DAYS = 365
DEFAULT_LOGIN_HISTORY_LIMIT = 100
SECONDS_PER_DAY = 86400


def utcnow() -> datetime:
    """Return the current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents one issued license together with its user roster,
    device binding and usage counters. This is an immutable value
    object: every state change returns a new instance.
    """

    key: str
    customer_id: str
    type: str
    created: datetime
    expiration_date: datetime
    validity_days: int
    bound_device_id: Optional[str] = None
    usage_count: int = 0
    is_active: bool = True
    name: Optional[str] = None
    users: Tuple[UserAssignment, ...] = ()
    login_history: Tuple[LoginAttempt, ...] = ()

    def __post_init__(self):
        """Validate license entity."""
        if not self.key:
            raise ValueError("License key is required")
        if not self.customer_id:
            raise ValueError("Customer ID is required")
        if self.usage_count < 0:
            raise ValueError("Usage count cannot be negative")

    @classmethod
    def create(
        cls,
        customer_id: str,
        license_type: Optional[str] = None,
        validity_days: Optional[int] = None,
        name: Optional[str] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        now: Optional[datetime] = None,
    ) -> "License":
        """
        Issue a new License entity with a freshly generated key.

        Args:
            customer_id: Customer identifier (required, non-blank)
            license_type: Free-form license type (defaults to 'production')
            validity_days: Days until expiration (defaults to 365)
            name: Optional display name
            key_prefix: Prefix for the generated key
            now: Creation time (defaults to current UTC time)

        Returns:
            License entity instance

        Raises:
            ValidationError: If customer_id is blank or validity_days is not positive
        """
        customer_id = (customer_id or "").strip()
        if not customer_id:
            raise ValidationError("Customer ID is required")

        if validity_days is None:
            validity_days = DEFAULT_VALIDITY_DAYS
        if isinstance(validity_days, bool) or not isinstance(validity_days, int) or validity_days <= 0:
            raise ValidationError("validityDays must be a positive integer")

        created = now or utcnow()
        try:
            expiration_date = created + timedelta(days=validity_days)
        except OverflowError as e:
            raise ValidationError("validityDays out of range") from e

        return cls(
            key=generate_license_key(customer_id, key_prefix),
            customer_id=customer_id,
            type=license_type or DEFAULT_LICENSE_TYPE,
            created=created,
            expiration_date=expiration_date,
            validity_days=validity_days,
            name=name or None,
        )

    @property
    def hash(self) -> str:
        """Stable identifier derived from the key."""
        return hash_license_key(self.key)

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """Check if the expiration date lies in the past."""
        return self.expiration_date < (current_time or utcnow())

    def days_until_expiry(self, current_time: Optional[datetime] = None) -> float:
        """Fractional number of days until expiration (negative once expired)."""
        delta = self.expiration_date - (current_time or utcnow())
        return delta.total_seconds() / SECONDS_PER_DAY

    def remaining_days(self, current_time: Optional[datetime] = None) -> int:
        """Whole days until expiration, rounded up."""
        return math.ceil(self.days_until_expiry(current_time))

    # Device binding: unbound -> bound(D), never rebound.

    def accepts_device(self, device_id: str) -> bool:
        """Check if the license may be used on the given device."""
        return self.bound_device_id is None or self.bound_device_id == device_id

    def bind_device(self, device_id: str) -> "License":
        """
        Bind an unbound license to a device.

        Binding to the device the license is already bound to is a no-op.

        Raises:
            ValueError: If the license is bound to a different device
        """
        if self.bound_device_id == device_id:
            return self
        if self.bound_device_id is not None:
            raise ValueError("License is already bound to a different device")
        return replace(self, bound_device_id=device_id)

    def record_usage(self) -> "License":
        """Return a new instance with usage_count incremented by one."""
        return replace(self, usage_count=self.usage_count + 1)

    def record_login(
        self,
        username: str,
        current_time: Optional[datetime] = None,
        limit: int = DEFAULT_LOGIN_HISTORY_LIMIT,
    ) -> "License":
        """Append a successful login, keeping only the newest `limit` entries."""
        attempt = LoginAttempt(username=username, timestamp=current_time or utcnow(), success=True)
        history = (self.login_history + (attempt,))[-limit:]
        return replace(self, login_history=history)

    def set_active(self, active: bool) -> "License":
        """Return a new instance with the given activation flag."""
        return replace(self, is_active=active)

    def extend(self, days_to_add: int) -> "License":
        """
        Extend the expiration date.

        Raises:
            ValidationError: If days_to_add is not a positive integer or
                pushes the expiration date past the representable range
        """
        if isinstance(days_to_add, bool) or not isinstance(days_to_add, int) or days_to_add <= 0:
            raise ValidationError("License hash and positive daysToAdd are required")
        try:
            expiration_date = self.expiration_date + timedelta(seconds=days_to_add * SECONDS_PER_DAY)
        except OverflowError as e:
            raise ValidationError("daysToAdd out of range") from e

        return replace(
            self,
            expiration_date=expiration_date,
            validity_days=self.validity_days + days_to_add,
        )

    # User roster

    def find_user(self, username: str) -> Optional[UserAssignment]:
        """Find an assigned user by exact username."""
        for user in self.users:
            if user.username == username:
                return user
        return None

    def add_user(
        self,
        username: str,
        role: Optional[str] = None,
        current_time: Optional[datetime] = None,
    ) -> "License":
        """
        Assign a new user to the license.

        Raises:
            ValidationError: If username is blank
            DuplicateUserError: If username is already assigned
        """
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if self.find_user(username):
            raise DuplicateUserError()
        user = UserAssignment.create(username, role, added_at=current_time)
        return replace(self, users=self.users + (user,))

    def set_user_active(self, username: str, is_active: bool) -> "License":
        """
        Toggle a user's activation flag.

        Raises:
            UserNotFoundError: If the user is not assigned
        """
        if not self.find_user(username):
            raise UserNotFoundError()
        users = tuple(
            user.set_active(is_active) if user.username == username else user for user in self.users
        )
        return replace(self, users=users)

    def remove_user(self, username: str) -> "License":
        """
        Remove a user from the license.

        Raises:
            UserNotFoundError: If the user is not assigned
        """
        if not self.find_user(username):
            raise UserNotFoundError()
        return replace(self, users=tuple(user for user in self.users if user.username != username))
