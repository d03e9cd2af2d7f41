"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities, keyed by license hash.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def save(self, license_hash: str, license: License) -> License:
        """
        Insert or replace a license and persist the registry.

        Args:
            license_hash: Hash of the license key
            license: License entity to save

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    def find_by_hash(self, license_hash: str) -> Optional[License]:
        """
        Find a license by hash.

        Args:
            license_hash: Hash of the license key

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its raw key.

        Args:
            license_key: Raw license key

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    def delete(self, license_hash: str) -> bool:
        """
        Remove a license and persist the registry.

        Args:
            license_hash: Hash of the license key

        Returns:
            True if a license was removed, False if it did not exist
        """
        pass

    @abstractmethod
    def list_all(self) -> List[License]:
        """
        List all licenses in insertion order.

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    def exists(self, license_hash: str) -> bool:
        """
        Check if a license exists.

        Args:
            license_hash: Hash of the license key

        Returns:
            True if license exists, False otherwise
        """
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        Exclusive section for a read-modify-write-persist sequence.

        Returns:
            Context manager holding the repository lock
        """
        pass
