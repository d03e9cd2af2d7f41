"""
ExtendLicenseCommand.

Command to push a license's expiration date forward.
"""

from dataclasses import dataclass


@dataclass
class ExtendLicenseCommand:
    """Command to extend a license by a number of days."""

    license_hash: str
    days_to_add: int
