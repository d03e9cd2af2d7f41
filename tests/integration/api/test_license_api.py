"""
Integration tests for License administration API endpoints.
"""

import re

import pytest
from django.urls import reverse

from licenses.domain.license_key import hash_license_key

UNKNOWN_HASH = "0" * 64


def issue(api_client, **payload):
    payload.setdefault("customerId", "CLINIC-1")
    return api_client.post(reverse("licenses:license-list"), payload, format="json")


@pytest.mark.integration
class TestLicenseAPI:
    """Integration tests for License API."""

    def test_issue_license(self, api_client, installed_registry):
        """Test issuing a license via API."""
        response = issue(api_client, type="trial", validityDays=30, name="Clinic Pro")

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "License created successfully"
        license = data["license"]
        assert re.match(r"^VET-CLINIC-1-[0-9A-F]{16}$", license["key"])
        assert license["hash"] == hash_license_key(license["key"])
        assert license["type"] == "trial"
        assert license["validityDays"] == 30
        assert license["usageCount"] == 0
        assert license["isActive"] is True
        assert license["boundDeviceId"] is None
        assert license["users"] == []
        assert installed_registry.exists(license["hash"])

    def test_issue_defaults(self, api_client):
        """Test default type and validity."""
        license = issue(api_client).json()["license"]

        assert license["type"] == "production"
        assert license["validityDays"] == 365

    def test_issue_without_customer(self, api_client, installed_registry):
        """Test missing customer id."""
        response = api_client.post(reverse("licenses:license-list"), {}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert response.json()["error"]["message"] == "Customer ID is required"
        assert len(installed_registry) == 0

    def test_issue_with_invalid_validity(self, api_client):
        """Test non-positive validity."""
        response = issue(api_client, validityDays=-1)
        assert response.status_code == 400


    def test_issue_with_out_of_range_validity(self, api_client, installed_registry):
        """Test a validity past the representable date range is a 400."""
        response = issue(api_client, validityDays=100000000)

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "VALIDATION_ERROR",
            "message": "validityDays out of range",
        }
        assert len(installed_registry) == 0

    def test_list_licenses(self, api_client):
        """Test listing licenses."""
        issue(api_client, customerId="A")
        issue(api_client, customerId="B")

        response = api_client.get(reverse("licenses:license-list"))

        assert response.status_code == 200
        assert [item["customerId"] for item in response.json()] == ["A", "B"]
        assert all(len(item["hash"]) == 64 for item in response.json())

    def test_get_license(self, api_client):
        """Test fetching one license."""
        license = issue(api_client).json()["license"]

        response = api_client.get(reverse("licenses:license-detail", args=[license["hash"]]))

        assert response.status_code == 200
        assert response.json()["key"] == license["key"]

    def test_get_unknown_license(self, api_client):
        """Test unknown hash."""
        response = api_client.get(reverse("licenses:license-detail", args=[UNKNOWN_HASH]))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"
        assert response.json()["error"]["message"] == "License not found"

    def test_deactivate_and_activate(self, api_client):
        """Test toggling a license."""
        license_hash = issue(api_client).json()["license"]["hash"]

        response = api_client.put(reverse("licenses:deactivate-license", args=[license_hash]))
        assert response.status_code == 200
        assert response.json()["message"] == "License deactivated"
        assert response.json()["license"]["isActive"] is False

        response = api_client.put(reverse("licenses:activate-license", args=[license_hash]))
        assert response.json()["message"] == "License activated"
        assert response.json()["license"]["isActive"] is True

    def test_deactivate_unknown(self, api_client):
        """Test unknown hash."""
        response = api_client.put(reverse("licenses:deactivate-license", args=[UNKNOWN_HASH]))
        assert response.status_code == 404

    def test_extend_license(self, api_client):
        """Test extending a license."""
        license = issue(api_client, validityDays=10).json()["license"]

        response = api_client.put(
            reverse("licenses:extend-license", args=[license["hash"]]),
            {"daysToAdd": 30},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["message"] == "License extended by 30 days"
        assert response.json()["license"]["validityDays"] == 40

    @pytest.mark.parametrize("payload", [{}, {"daysToAdd": 0}, {"daysToAdd": -5}])
    def test_extend_invalid_days(self, api_client, payload):
        """Test invalid daysToAdd."""
        license_hash = issue(api_client).json()["license"]["hash"]

        response = api_client.put(
            reverse("licenses:extend-license", args=[license_hash]), payload, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "License hash and positive daysToAdd are required"


    def test_extend_out_of_range(self, api_client):
        """Test an extension past the representable date range is a 400."""
        license = issue(api_client, validityDays=10).json()["license"]

        response = api_client.put(
            reverse("licenses:extend-license", args=[license["hash"]]),
            {"daysToAdd": 100000000},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"] == {"code": "VALIDATION_ERROR", "message": "daysToAdd out of range"}
        detail = api_client.get(reverse("licenses:license-detail", args=[license["hash"]])).json()
        assert detail["validityDays"] == 10

    def test_extend_unknown(self, api_client):
        """Test unknown hash."""
        response = api_client.put(
            reverse("licenses:extend-license", args=[UNKNOWN_HASH]), {"daysToAdd": 5}, format="json"
        )
        assert response.status_code == 404

    def test_delete_license(self, api_client):
        """Test deleting a license."""
        license_hash = issue(api_client).json()["license"]["hash"]
        url = reverse("licenses:license-detail", args=[license_hash])

        response = api_client.delete(url)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "License deleted"}

        assert api_client.get(url).status_code == 404
        assert api_client.delete(url).status_code == 404

    def test_stats(self, api_client, installed_registry, make_license):
        """Test registry statistics."""
        for license in (
            make_license(customer_id="OLD", expires_in_days=-1, created_days_ago=400),
            make_license(customer_id="SOON", expires_in_days=10),
            make_license(customer_id="LATER", expires_in_days=200, is_active=False),
        ):
            installed_registry.save(license.hash, license)

        response = api_client.get(reverse("licenses:license-stats"))

        assert response.status_code == 200
        assert response.json() == {
            "total": 3,
            "active": 2,
            "inactive": 1,
            "expired": 1,
            "expiringIn30Days": 1,
            "available": 1,
        }

    def test_persistence_failure_is_500(self, api_client, installed_registry, monkeypatch):
        """Test registry write failure surfaces as internal error."""
        import os

        def fail_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "replace", fail_replace)

        response = issue(api_client)

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert len(installed_registry) == 0
