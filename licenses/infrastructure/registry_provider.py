"""
Process-wide license registry.

The registry is built once, on first use, from the
LICENSE_REGISTRY_FILE setting and shared by all request handlers.
"""
import logging
import threading
from typing import Optional

from django.conf import settings

from core.domain.exceptions import PersistenceError
from licenses.infrastructure.repositories.json_license_registry import JsonLicenseRegistry

logger = logging.getLogger(__name__)

_registry: Optional[JsonLicenseRegistry] = None
_registry_lock = threading.Lock()


def get_license_registry() -> JsonLicenseRegistry:
    """Return the shared registry, loading it from disk on first call."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = JsonLicenseRegistry(settings.LICENSE_REGISTRY_FILE)
    return _registry


def set_license_registry(registry: Optional[JsonLicenseRegistry]) -> None:
    """Replace the shared registry (None forces a reload on next use)."""
    global _registry
    with _registry_lock:
        _registry = registry


def flush_license_registry() -> None:
    """Final flush at interpreter shutdown."""
    if _registry is None:
        return
    try:
        _registry.flush()
    except PersistenceError as e:
        logger.error("Final flush of license registry failed: %s", e, exc_info=True)
