"""
DeleteLicenseCommand.

Command to remove a license from the registry.
"""

from dataclasses import dataclass


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license."""

    license_hash: str
