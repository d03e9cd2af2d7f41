"""
Validation commands.

Validation is framed as a command because a successful validation
mutates the license (usage counter, device binding, login history).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license by key."""

    license_key: Optional[str]


@dataclass
class VerifyDeviceLicenseCommand:
    """Command to validate a license for a device, binding it on first use."""

    license_key: Optional[str]
    device_id: Optional[str]


@dataclass
class VerifyUserLicenseCommand:
    """Command to validate a user login against a license."""

    username: Optional[str]
    license_key: Optional[str]
