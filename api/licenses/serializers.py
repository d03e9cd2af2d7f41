"""
Serializers for License API endpoints.

Request and response bodies use camelCase keys; `source` maps them
onto the snake_case attributes of commands, entities and DTOs.
"""

from rest_framework import serializers


# Requests


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for issue license request."""

    customerId = serializers.CharField(
        source="customer_id", required=False, allow_blank=True, allow_null=True, max_length=200
    )
    type = serializers.CharField(
        source="license_type", required=False, allow_blank=True, allow_null=True, max_length=100
    )
    validityDays = serializers.IntegerField(source="validity_days", required=False, allow_null=True)
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for license key validation request."""

    licenseKey = serializers.CharField(
        source="license_key", required=False, allow_blank=True, allow_null=True,
        trim_whitespace=False,
    )


class VerifyDeviceLicenseRequestSerializer(serializers.Serializer):
    """Serializer for device-bound validation request."""

    licenseKey = serializers.CharField(
        source="license_key", required=False, allow_blank=True, allow_null=True,
        trim_whitespace=False,
    )
    deviceId = serializers.CharField(
        source="device_id", required=False, allow_blank=True, allow_null=True,
        trim_whitespace=False,
    )


class VerifyUserLicenseRequestSerializer(serializers.Serializer):
    """Serializer for user login validation request."""

    username = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )
    licenseKey = serializers.CharField(
        source="license_key", required=False, allow_blank=True, allow_null=True,
        trim_whitespace=False,
    )


class AddUserRequestSerializer(serializers.Serializer):
    """Serializer for add user request."""

    username = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=150, trim_whitespace=False
    )
    role = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)


class SetUserActiveRequestSerializer(serializers.Serializer):
    """Serializer for user activate/deactivate request."""

    isActive = serializers.BooleanField(source="is_active", required=True)


class ExtendLicenseRequestSerializer(serializers.Serializer):
    """Serializer for extend license request."""

    daysToAdd = serializers.IntegerField(source="days_to_add", required=False, allow_null=True)


# Responses


class UserAssignmentSerializer(serializers.Serializer):
    """Serializer for a user assigned to a license."""

    username = serializers.CharField()
    role = serializers.CharField()
    addedAt = serializers.DateTimeField(source="added_at")
    isActive = serializers.BooleanField(source="is_active")


class LoginAttemptSerializer(serializers.Serializer):
    """Serializer for a login history entry."""

    username = serializers.CharField()
    timestamp = serializers.DateTimeField()
    success = serializers.BooleanField()


class LicenseSerializer(serializers.Serializer):
    """Serializer for a License entity, including its hash."""

    hash = serializers.CharField()
    key = serializers.CharField()
    customerId = serializers.CharField(source="customer_id")
    type = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    created = serializers.DateTimeField()
    expirationDate = serializers.DateTimeField(source="expiration_date")
    validityDays = serializers.IntegerField(source="validity_days")
    boundDeviceId = serializers.CharField(source="bound_device_id", allow_null=True)
    usageCount = serializers.IntegerField(source="usage_count")
    isActive = serializers.BooleanField(source="is_active")
    users = UserAssignmentSerializer(many=True)
    loginHistory = LoginAttemptSerializer(source="login_history", many=True)


class LicenseMutationResponseSerializer(serializers.Serializer):
    """Serializer for responses wrapping a mutated license."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    license = LicenseSerializer()


class UserMutationResponseSerializer(serializers.Serializer):
    """Serializer for responses wrapping a mutated user."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    user = UserAssignmentSerializer()


class SuccessResponseSerializer(serializers.Serializer):
    """Serializer for plain success responses."""

    success = serializers.BooleanField()
    message = serializers.CharField()


class LicenseUsersResponseSerializer(serializers.Serializer):
    """Serializer for LicenseUsersDTO."""

    licenseKey = serializers.CharField(source="license_key")
    customerId = serializers.CharField(source="customer_id")
    users = UserAssignmentSerializer(many=True)


class LicenseStatsResponseSerializer(serializers.Serializer):
    """Serializer for LicenseStatsDTO."""

    total = serializers.IntegerField()
    active = serializers.IntegerField()
    inactive = serializers.IntegerField()
    expired = serializers.IntegerField()
    expiringIn30Days = serializers.IntegerField(source="expiring_in_30_days")
    available = serializers.IntegerField()


class ValidationFailureSerializer(serializers.Serializer):
    """Serializer for a negative validation outcome."""

    valid = serializers.BooleanField()
    reason = serializers.CharField()
    code = serializers.CharField()


class KeyValidationResponseSerializer(serializers.Serializer):
    """Serializer for a successful KeyValidationDTO."""

    valid = serializers.BooleanField()
    customerId = serializers.CharField(source="customer_id")
    expirationDate = serializers.DateTimeField(source="expiration_date")
    type = serializers.CharField()


class DeviceValidationResponseSerializer(serializers.Serializer):
    """Serializer for a successful DeviceValidationDTO."""

    valid = serializers.BooleanField()
    licenseName = serializers.CharField(source="license_name")
    expirationDate = serializers.DateTimeField(source="expiration_date")
    boundDeviceId = serializers.CharField(source="bound_device_id")
    remainingDays = serializers.IntegerField(source="remaining_days")


class ValidatedUserSerializer(serializers.Serializer):
    """Serializer for the user part of a successful login validation."""

    username = serializers.CharField()
    role = serializers.CharField()


class UserValidationResponseSerializer(serializers.Serializer):
    """Serializer for a successful UserValidationDTO."""

    valid = serializers.BooleanField()
    customerId = serializers.CharField(source="customer_id")
    expirationDate = serializers.DateTimeField(source="expiration_date")
    type = serializers.CharField()
    user = ValidatedUserSerializer(source="*")
