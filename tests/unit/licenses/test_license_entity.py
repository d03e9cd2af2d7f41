"""
Unit tests for License domain entity.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import DuplicateUserError, UserNotFoundError, ValidationError
from licenses.domain.license import License
from licenses.domain.license_key import hash_license_key

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating a license entity."""
        license = License.create(customer_id="CUST-1", license_type="trial", validity_days=30, now=NOW)

        assert license.key.startswith("VET-CUST-1-")
        assert license.customer_id == "CUST-1"
        assert license.type == "trial"
        assert license.created == NOW
        assert license.expiration_date == NOW + timedelta(days=30)
        assert license.validity_days == 30
        assert license.usage_count == 0
        assert license.is_active is True
        assert license.bound_device_id is None
        assert license.users == ()
        assert license.login_history == ()

    def test_create_license_defaults(self):
        """Test default type and validity."""
        license = License.create(customer_id="CUST-1", now=NOW)

        assert license.type == "production"
        assert license.validity_days == 365
        assert license.expiration_date == NOW + timedelta(days=365)

    @pytest.mark.parametrize("customer_id", ["", "   ", None])
    def test_create_requires_customer(self, customer_id):
        """Test blank customer id is rejected."""
        with pytest.raises(ValidationError, match="Customer ID is required"):
            License.create(customer_id=customer_id)

    @pytest.mark.parametrize("validity_days", [0, -5, True, "30"])
    def test_create_rejects_invalid_validity(self, validity_days):
        """Test validity must be a positive integer."""
        with pytest.raises(ValidationError):
            License.create(customer_id="CUST-1", validity_days=validity_days)


    @pytest.mark.parametrize("validity_days", [100_000_000, 10**12])
    def test_create_rejects_out_of_range_validity(self, validity_days):
        """Test an unrepresentable expiration date is a validation error."""
        with pytest.raises(ValidationError, match="validityDays out of range"):
            License.create(customer_id="CUST-1", validity_days=validity_days, now=NOW)

    def test_hash_is_derived_from_key(self):
        """Test hash property."""
        license = License.create(customer_id="CUST-1")
        assert license.hash == hash_license_key(license.key)

    def test_expiry_helpers(self):
        """Test expiration checks relative to a given time."""
        license = License.create(customer_id="CUST-1", validity_days=10, now=NOW)

        assert license.is_expired(NOW) is False
        assert license.is_expired(NOW + timedelta(days=11)) is True
        assert license.days_until_expiry(NOW) == 10
        assert license.remaining_days(NOW + timedelta(hours=1)) == 10
        assert license.remaining_days(NOW + timedelta(days=9, hours=23)) == 1

    def test_bind_unbound_device(self):
        """Test first binding."""
        license = License.create(customer_id="CUST-1")
        bound = license.bind_device("dev-A")

        assert bound.bound_device_id == "dev-A"
        assert license.bound_device_id is None

    def test_bind_same_device_is_noop(self):
        """Test binding again to the same device."""
        bound = License.create(customer_id="CUST-1").bind_device("dev-A")
        assert bound.bind_device("dev-A") is bound
        assert bound.accepts_device("dev-A") is True

    def test_bind_other_device_fails(self):
        """Test a bound license never rebinds."""
        bound = License.create(customer_id="CUST-1").bind_device("dev-A")

        assert bound.accepts_device("dev-B") is False
        with pytest.raises(ValueError):
            bound.bind_device("dev-B")

    def test_record_usage(self):
        """Test usage counter increments."""
        license = License.create(customer_id="CUST-1")
        assert license.record_usage().record_usage().usage_count == 2

    def test_record_login_is_bounded(self):
        """Test login history keeps only the newest entries."""
        license = License.create(customer_id="CUST-1")
        for i in range(5):
            license = license.record_login(f"user{i}", NOW + timedelta(minutes=i), limit=3)

        assert [entry.username for entry in license.login_history] == ["user2", "user3", "user4"]
        assert all(entry.success for entry in license.login_history)

    def test_set_active(self):
        """Test toggling activation."""
        license = License.create(customer_id="CUST-1")
        assert license.set_active(False).is_active is False
        assert license.set_active(False).set_active(True).is_active is True

    def test_extend_license(self):
        """Test extending adds exact seconds and validity days."""
        license = License.create(customer_id="CUST-1", validity_days=365, now=NOW)
        extended = license.extend(30)

        delta = extended.expiration_date - license.expiration_date
        assert delta.total_seconds() == 30 * 86400
        assert extended.validity_days == 395

    @pytest.mark.parametrize("days", [0, -1, True, None])
    def test_extend_rejects_non_positive(self, days):
        """Test extension must be a positive integer."""
        license = License.create(customer_id="CUST-1")
        with pytest.raises(ValidationError, match="positive daysToAdd"):
            license.extend(days)


    @pytest.mark.parametrize("days", [100_000_000, 10**12])
    def test_extend_rejects_out_of_range(self, days):
        """Test extending past the representable range is a validation error."""
        license = License.create(customer_id="CUST-1", now=NOW)
        with pytest.raises(ValidationError, match="daysToAdd out of range"):
            license.extend(days)

    def test_add_user(self):
        """Test assigning a user."""
        license = License.create(customer_id="CUST-1").add_user("alice", "admin", NOW)
        user = license.find_user("alice")

        assert user.role == "admin"
        assert user.is_active is True
        assert user.added_at == NOW

    def test_add_user_default_role(self):
        """Test default role."""
        license = License.create(customer_id="CUST-1").add_user("bob")
        assert license.find_user("bob").role == "user"

    def test_add_duplicate_user(self):
        """Test duplicate usernames are rejected."""
        license = License.create(customer_id="CUST-1").add_user("alice")
        with pytest.raises(DuplicateUserError):
            license.add_user("alice", "admin")

    def test_usernames_are_case_sensitive(self):
        """Test 'Alice' and 'alice' are different users."""
        license = License.create(customer_id="CUST-1").add_user("alice").add_user("Alice")
        assert len(license.users) == 2

    def test_add_blank_user(self):
        """Test blank usernames are rejected."""
        with pytest.raises(ValidationError):
            License.create(customer_id="CUST-1").add_user("  ")

    def test_set_user_active(self):
        """Test toggling a user's flag."""
        license = License.create(customer_id="CUST-1").add_user("alice")
        assert license.set_user_active("alice", False).find_user("alice").is_active is False

    def test_set_unknown_user_active(self):
        """Test toggling an unknown user."""
        with pytest.raises(UserNotFoundError):
            License.create(customer_id="CUST-1").set_user_active("ghost", False)

    def test_remove_user(self):
        """Test removing a user keeps the others in order."""
        license = (
            License.create(customer_id="CUST-1").add_user("a").add_user("b").add_user("c")
        )
        remaining = license.remove_user("b")
        assert [user.username for user in remaining.users] == ["a", "c"]

    def test_remove_unknown_user(self):
        """Test removing an unknown user."""
        with pytest.raises(UserNotFoundError):
            License.create(customer_id="CUST-1").remove_user("ghost")

    def test_negative_usage_rejected(self):
        """Test entity invariant on usage count."""
        license = License.create(customer_id="CUST-1")
        with pytest.raises(ValueError):
            License(
                key=license.key,
                customer_id=license.customer_id,
                type=license.type,
                created=license.created,
                expiration_date=license.expiration_date,
                validity_days=license.validity_days,
                usage_count=-1,
            )
