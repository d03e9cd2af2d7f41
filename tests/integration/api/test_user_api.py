"""
Integration tests for license user roster API endpoints.
"""

import pytest
from django.urls import reverse


@pytest.fixture
def license_hash(api_client):
    """Fixture for the hash of a license issued via the API."""
    response = api_client.post(
        reverse("licenses:license-list"), {"customerId": "CLINIC-9"}, format="json"
    )
    return response.json()["license"]["hash"]


@pytest.mark.integration
class TestLicenseUsersAPI:
    """Integration tests for license users."""

    def test_add_user(self, api_client, license_hash):
        """Test adding a user."""
        response = api_client.post(
            reverse("licenses:license-users", args=[license_hash]),
            {"username": "alice"},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User added to license"
        assert data["user"]["username"] == "alice"
        assert data["user"]["role"] == "user"
        assert data["user"]["isActive"] is True
        assert data["user"]["addedAt"]


    def test_add_user_keeps_username_verbatim(self, api_client, license_hash):
        """Test surrounding whitespace is part of the username."""
        url = reverse("licenses:license-users", args=[license_hash])
        api_client.post(url, {"username": "alice"}, format="json")

        response = api_client.post(url, {"username": " alice"}, format="json")

        assert response.status_code == 201
        assert response.json()["user"]["username"] == " alice"
        usernames = [user["username"] for user in api_client.get(url).json()["users"]]
        assert usernames == ["alice", " alice"]

    def test_add_duplicate_user(self, api_client, license_hash):
        """Test duplicate username."""
        url = reverse("licenses:license-users", args=[license_hash])
        api_client.post(url, {"username": "alice"}, format="json")

        response = api_client.post(url, {"username": "alice", "role": "admin"}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DUPLICATE_USER"
        assert response.json()["error"]["message"] == "User already exists in this license"

    def test_add_user_unknown_license(self, api_client):
        """Test unknown license."""
        response = api_client.post(
            reverse("licenses:license-users", args=["0" * 64]), {"username": "alice"}, format="json"
        )
        assert response.status_code == 404

    def test_list_users(self, api_client, license_hash):
        """Test listing users."""
        url = reverse("licenses:license-users", args=[license_hash])
        api_client.post(url, {"username": "alice"}, format="json")
        api_client.post(url, {"username": "bob", "role": "vet"}, format="json")

        response = api_client.get(url)

        assert response.status_code == 200
        data = response.json()
        assert data["customerId"] == "CLINIC-9"
        assert data["licenseKey"].startswith("VET-CLINIC-9-")
        assert [user["username"] for user in data["users"]] == ["alice", "bob"]

    def test_set_user_active(self, api_client, license_hash):
        """Test deactivating and reactivating a user."""
        api_client.post(
            reverse("licenses:license-users", args=[license_hash]), {"username": "alice"}, format="json"
        )
        url = reverse("licenses:license-user-detail", args=[license_hash, "alice"])

        response = api_client.put(url, {"isActive": False}, format="json")
        assert response.status_code == 200
        assert response.json()["message"] == "User deactivated"
        assert response.json()["user"]["isActive"] is False

        response = api_client.put(url, {"isActive": True}, format="json")
        assert response.json()["message"] == "User activated"

    def test_set_user_active_requires_flag(self, api_client, license_hash):
        """Test missing isActive."""
        response = api_client.put(
            reverse("licenses:license-user-detail", args=[license_hash, "alice"]), {}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_set_unknown_user(self, api_client, license_hash):
        """Test unknown user."""
        response = api_client.put(
            reverse("licenses:license-user-detail", args=[license_hash, "ghost"]),
            {"isActive": True},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found in license"

    def test_remove_user(self, api_client, license_hash):
        """Test removing a user."""
        api_client.post(
            reverse("licenses:license-users", args=[license_hash]), {"username": "alice"}, format="json"
        )
        url = reverse("licenses:license-user-detail", args=[license_hash, "alice"])

        response = api_client.delete(url)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "User removed from license"}

        assert api_client.delete(url).status_code == 404
