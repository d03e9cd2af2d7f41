"""
SetLicenseActiveCommand.

Command to activate or deactivate a license.
"""

from dataclasses import dataclass


@dataclass
class SetLicenseActiveCommand:
    """Command to toggle a license's activation flag."""

    license_hash: str
    active: bool
