"""
GetLicenseQuery.
"""

from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query to fetch one license by hash."""

    license_hash: str
