"""
User roster value objects.

UserAssignment is a named user authorized under a license;
LoginAttempt is one entry of a license's login history.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

DEFAULT_USER_ROLE = "user"


@dataclass(frozen=True)
class UserAssignment:
    """A user authorized under a license, with its own active flag."""

    username: str
    role: str
    added_at: datetime
    is_active: bool = True

    @classmethod
    def create(
        cls,
        username: str,
        role: Optional[str] = None,
        added_at: Optional[datetime] = None,
    ) -> "UserAssignment":
        """Create an active assignment added now."""
        return cls(
            username=username,
            role=role or DEFAULT_USER_ROLE,
            added_at=added_at or datetime.now(timezone.utc),
            is_active=True,
        )

    def set_active(self, is_active: bool) -> "UserAssignment":
        """Return a new instance with the given activation flag."""
        return replace(self, is_active=is_active)


@dataclass(frozen=True)
class LoginAttempt:
    """One recorded login."""

    username: str
    timestamp: datetime
    success: bool = True
