"""
License query handlers.
"""
from typing import List

from core.domain.exceptions import LicenseNotFoundError
from core.metrics import registry_licenses
from licenses.application.dto.license_dto import LicenseStatsDTO
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.get_license_stats import GetLicenseStatsQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.license import License, utcnow
from licenses.ports.license_repository import LicenseRepository

DEFAULT_EXPIRING_SOON_DAYS = 30


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def handle(self, query: GetLicenseQuery) -> License:
        """
        Fetch one license.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = self.license_repository.find_by_hash(query.license_hash)
        if not license:
            raise LicenseNotFoundError()
        return license


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def handle(self, query: ListLicensesQuery) -> List[License]:
        """List every license in insertion order."""
        return self.license_repository.list_all()


class GetLicenseStatsHandler:
    """
    Handler for GetLicenseStatsQuery.

    Statistics are computed in a single pass at call time; a license
    counts as expiring when it expires within the next
    `expiring_soon_days` days and has not expired yet.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.expiring_soon_days = expiring_soon_days

    def handle(self, query: GetLicenseStatsQuery) -> LicenseStatsDTO:
        """Compute registry statistics."""
        now = query.current_time or utcnow()
        licenses = self.license_repository.list_all()

        active = expired = expiring = 0
        for license in licenses:
            days_left = license.days_until_expiry(now)
            if days_left < 0:
                expired += 1
            elif days_left <= self.expiring_soon_days:
                expiring += 1
            if license.is_active:
                active += 1

        total = len(licenses)
        registry_licenses.labels(state="active").set(active)
        registry_licenses.labels(state="inactive").set(total - active)
        registry_licenses.labels(state="expired").set(expired)

        return LicenseStatsDTO(
            total=total,
            active=active,
            inactive=total - active,
            expired=expired,
            expiring_in_30_days=expiring,
            available=total - active,
        )
