"""
JSON file implementation of LicenseRepository port.

The registry keeps every license in memory, keyed by hash, and
checkpoints the whole map to a flat JSON file after each mutation.
The file is a JSON array of [hash, record] pairs.
"""
import contextlib
import json
import logging
import os
import tempfile
import threading
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from core.domain.exceptions import PersistenceError
from licenses.domain.license import License
from licenses.domain.license_key import hash_license_key
from licenses.domain.user import LoginAttempt, UserAssignment
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str) -> datetime:
    # Files written by JavaScript clients use a trailing 'Z'
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


class JsonLicenseRegistry(LicenseRepository):
    """
    File-backed implementation of LicenseRepository.

    This adapter:
    1. Loads the persisted file once, at construction
    2. Converts JSON records to domain entities and back
    3. Rewrites the whole file atomically after every mutation
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize registry and load the persisted file.

        Args:
            path: Location of the JSON file

        Raises:
            PersistenceError: If an existing file cannot be read or parsed
        """
        self.path = Path(path)
        self._lock = threading.RLock()
        self._licenses: "OrderedDict[str, License]" = self._load()

    def _to_domain(self, record: Dict[str, Any]) -> License:
        """
        Convert a persisted record to a domain entity.

        Args:
            record: JSON object as stored in the file

        Returns:
            License domain entity
        """
        users = tuple(
            UserAssignment(
                username=user["username"],
                role=user.get("role") or "user",
                added_at=_parse_timestamp(user["addedAt"]),
                is_active=bool(user.get("isActive", False)),
            )
            for user in record.get("users") or []
        )
        history = tuple(
            LoginAttempt(
                username=entry["username"],
                timestamp=_parse_timestamp(entry["timestamp"]),
                success=bool(entry.get("success", True)),
            )
            for entry in record.get("loginHistory") or []
        )
        return License(
            key=record["key"],
            customer_id=record["customerId"],
            type=record.get("type") or "production",
            created=_parse_timestamp(record["created"]),
            expiration_date=_parse_timestamp(record["expirationDate"]),
            validity_days=int(record["validityDays"]),
            bound_device_id=record.get("boundDeviceId"),
            usage_count=int(record.get("usageCount") or 0),
            is_active=bool(record.get("isActive", True)),
            name=record.get("name"),
            users=users,
            login_history=history,
        )

    def _to_record(self, license: License) -> Dict[str, Any]:
        """
        Convert a domain entity to a JSON record.

        Args:
            license: License domain entity

        Returns:
            JSON-serializable dictionary
        """
        record = {
            "key": license.key,
            "customerId": license.customer_id,
            "type": license.type,
            "created": _format_timestamp(license.created),
            "expirationDate": _format_timestamp(license.expiration_date),
            "validityDays": license.validity_days,
            "boundDeviceId": license.bound_device_id,
            "usageCount": license.usage_count,
            "isActive": license.is_active,
            "users": [
                {
                    "username": user.username,
                    "role": user.role,
                    "addedAt": _format_timestamp(user.added_at),
                    "isActive": user.is_active,
                }
                for user in license.users
            ],
            "loginHistory": [
                {
                    "username": entry.username,
                    "timestamp": _format_timestamp(entry.timestamp),
                    "success": entry.success,
                }
                for entry in license.login_history
            ],
        }
        if license.name:
            record["name"] = license.name
        return record

    def _load(self) -> "OrderedDict[str, License]":
        """Read the persisted file into an ordered hash -> license map."""
        licenses: "OrderedDict[str, License]" = OrderedDict()
        if not self.path.exists():
            logger.info("License registry file %s not found, starting empty", self.path)
            return licenses

        try:
            entries = json.loads(self.path.read_text(encoding="utf-8") or "[]")
            for license_hash, record in entries:
                license = self._to_domain(record)
                if license.hash != license_hash:
                    logger.warning("Stored hash %s does not match key of license", license_hash)
                licenses[license_hash] = license
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Error loading licenses from %s: %s", self.path, e, exc_info=True)
            raise PersistenceError(f"Cannot load license registry: {e}") from e

        logger.info("Loaded %d license(s) from %s", len(licenses), self.path)
        return licenses

    def _write(self, licenses: "OrderedDict[str, License]") -> None:
        """
        Atomically overwrite the file with the given map.

        Raises:
            PersistenceError: If the file cannot be written
        """
        entries = [[license_hash, self._to_record(license)] for license_hash, license in licenses.items()]
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".licenses-", suffix=".tmp", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(entries, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Error saving licenses to %s: %s", self.path, e, exc_info=True)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceError(f"Cannot save license registry: {e}") from e
        logger.debug("Persisted %d license(s) to %s", len(entries), self.path)

    def _commit(self, licenses: "OrderedDict[str, License]") -> None:
        # Memory is replaced only after the file write succeeded
        self._write(licenses)
        self._licenses = licenses

    @contextlib.contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Hold the registry lock for a read-modify-write-persist sequence.

        Usage:
            with registry.transaction():
                license = registry.find_by_hash(h)
                registry.save(h, license.set_active(False))
        """
        with self._lock:
            yield

    def save(self, license_hash: str, license: License) -> License:
        """
        Insert or replace a license and persist the registry.

        Args:
            license_hash: Hash of the license key
            license: License entity to save

        Returns:
            Saved license entity
        """
        with self._lock:
            licenses = OrderedDict(self._licenses)
            licenses[license_hash] = license
            self._commit(licenses)
        return license

    def find_by_hash(self, license_hash: str) -> Optional[License]:
        """
        Find a license by hash.

        Args:
            license_hash: Hash of the license key

        Returns:
            License entity or None if not found
        """
        return self._licenses.get(license_hash)

    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its raw key.

        Args:
            license_key: Raw license key

        Returns:
            License entity or None if not found
        """
        return self._licenses.get(hash_license_key(license_key))

    def delete(self, license_hash: str) -> bool:
        """
        Remove a license and persist the registry.

        Args:
            license_hash: Hash of the license key

        Returns:
            True if a license was removed, False if it did not exist
        """
        with self._lock:
            if license_hash not in self._licenses:
                return False
            licenses = OrderedDict(self._licenses)
            del licenses[license_hash]
            self._commit(licenses)
        return True

    def list_all(self) -> List[License]:
        """
        List all licenses in insertion order.

        Returns:
            List of License entities
        """
        return list(self._licenses.values())

    def exists(self, license_hash: str) -> bool:
        """
        Check if a license exists.

        Args:
            license_hash: Hash of the license key

        Returns:
            True if license exists, False otherwise
        """
        return license_hash in self._licenses

    def flush(self) -> None:
        """Write the current in-memory state to disk."""
        with self._lock:
            self._write(self._licenses)

    def __len__(self) -> int:
        return len(self._licenses)
