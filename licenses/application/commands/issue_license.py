"""
IssueLicenseCommand.

Command to issue a new license for a customer.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    A fresh key is generated for every command, even for a
    customer that already holds licenses.
    """

    customer_id: str
    license_type: Optional[str] = None
    validity_days: Optional[int] = None
    name: Optional[str] = None
