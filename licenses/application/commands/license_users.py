"""
License user roster commands.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class AddUserCommand:
    """Command to assign a user to a license."""

    license_hash: str
    username: str
    role: Optional[str] = None


@dataclass
class SetUserActiveCommand:
    """Command to activate or deactivate an assigned user."""

    license_hash: str
    username: str
    is_active: bool


@dataclass
class RemoveUserCommand:
    """Command to remove a user from a license."""

    license_hash: str
    username: str
