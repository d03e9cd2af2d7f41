"""
License key generation and hashing.

Keys are opaque display strings; the SHA-256 hash of a key is the
stable identifier of the license it belongs to.
"""

import hashlib
import secrets

DEFAULT_KEY_PREFIX = "VET"


def generate_license_key(customer_id: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-<customerId>-XXXXXXXXXXXXXXXX.

    Args:
        customer_id: Customer identifier embedded in the key
        prefix: Key prefix (e.g., 'VET' for VetCare)

    Returns:
        Generated license key string with a 16 hex char random suffix
    """
    suffix = secrets.token_hex(8).upper()
    return f"{prefix}-{customer_id}-{suffix}"


def hash_license_key(key: str) -> str:
    """Return the hex SHA-256 digest of a license key."""
    return hashlib.sha256(key.encode()).hexdigest()
