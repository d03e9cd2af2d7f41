"""
Pytest configuration and shared fixtures.
"""

from datetime import timedelta

import pytest

from licenses.domain.license import License, utcnow
from licenses.infrastructure.registry_provider import set_license_registry
from licenses.infrastructure.repositories.json_license_registry import JsonLicenseRegistry


@pytest.fixture
def registry_path(tmp_path):
    """Fixture for the location of the registry file."""
    return tmp_path / "licenses.json"


@pytest.fixture
def license_registry(registry_path):
    """Fixture for a JsonLicenseRegistry backed by a temporary file."""
    return JsonLicenseRegistry(registry_path)


@pytest.fixture
def installed_registry(license_registry):
    """Fixture that makes the temporary registry the process-wide one."""
    set_license_registry(license_registry)
    yield license_registry
    set_license_registry(None)


@pytest.fixture
def make_license():
    """Fixture for building License entities with explicit dates."""

    def _make(customer_id="CUST-1", expires_in_days=365, created_days_ago=0, **kwargs):
        created = utcnow() - timedelta(days=created_days_ago)
        license = License.create(customer_id=customer_id, now=created)
        return License(
            key=license.key,
            customer_id=license.customer_id,
            type=kwargs.pop("type", license.type),
            created=created,
            expiration_date=utcnow() + timedelta(days=expires_in_days),
            validity_days=kwargs.pop("validity_days", license.validity_days),
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_license(make_license):
    """Fixture for a sample active License entity."""
    return make_license()


@pytest.fixture
def expired_license(make_license):
    """Fixture for a License that expired yesterday."""
    return make_license(customer_id="CUST-OLD", expires_in_days=-1, created_days_ago=366)


@pytest.fixture
def stored_license(license_registry, sample_license):
    """Fixture for a License saved in the registry."""
    return license_registry.save(sample_license.hash, sample_license)


@pytest.fixture
def api_client(installed_registry):
    """Fixture for DRF API client talking to the temporary registry."""
    from rest_framework.test import APIClient

    return APIClient()
