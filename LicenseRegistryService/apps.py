"""
App configuration for License Registry Service.
"""

from django.apps import AppConfig


class LicenseRegistryServiceConfig(AppConfig):
    """App configuration for LicenseRegistryService."""

    name = "LicenseRegistryService"
    verbose_name = "License Registry Service"

    def ready(self):
        """Called when Django starts."""
        import atexit
        import logging

        from licenses.infrastructure.registry_provider import flush_license_registry

        # Only setup once (avoid duplicate registration)
        if not hasattr(self, "_initialized"):
            atexit.register(flush_license_registry)
            self._initialized = True
            logging.getLogger(__name__).info("Registered final license registry flush")
