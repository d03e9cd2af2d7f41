"""
ListLicenseUsersQuery.
"""

from dataclasses import dataclass


@dataclass
class ListLicenseUsersQuery:
    """Query to list the users assigned to a license."""

    license_hash: str
