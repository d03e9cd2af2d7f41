"""
GetLicenseStatsQuery.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class GetLicenseStatsQuery:
    """Query for registry-wide license statistics."""

    current_time: Optional[datetime] = None
