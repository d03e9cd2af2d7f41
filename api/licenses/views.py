"""
License API views.

These endpoints are used by:
- Administrators to issue, inspect and manage licenses and their users
- Client applications to validate a license by key, device or user login
"""

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.licenses.serializers import (
    AddUserRequestSerializer,
    DeviceValidationResponseSerializer,
    ExtendLicenseRequestSerializer,
    IssueLicenseRequestSerializer,
    KeyValidationResponseSerializer,
    LicenseMutationResponseSerializer,
    LicenseSerializer,
    LicenseStatsResponseSerializer,
    LicenseUsersResponseSerializer,
    SetUserActiveRequestSerializer,
    SuccessResponseSerializer,
    UserAssignmentSerializer,
    UserMutationResponseSerializer,
    UserValidationResponseSerializer,
    ValidateLicenseRequestSerializer,
    ValidationFailureSerializer,
    VerifyDeviceLicenseRequestSerializer,
    VerifyUserLicenseRequestSerializer,
)
from core.domain.value_objects import ValidationReason
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.license_users import (
    AddUserCommand,
    RemoveUserCommand,
    SetUserActiveCommand,
)
from licenses.application.commands.set_license_active import SetLicenseActiveCommand
from licenses.application.commands.validate_license import (
    ValidateLicenseCommand,
    VerifyDeviceLicenseCommand,
    VerifyUserLicenseCommand,
)
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    DeleteLicenseHandler,
    ExtendLicenseHandler,
    SetLicenseActiveHandler,
)
from licenses.application.handlers.license_query_handlers import (
    GetLicenseHandler,
    GetLicenseStatsHandler,
    ListLicensesHandler,
)
from licenses.application.handlers.license_user_handlers import (
    AddUserHandler,
    ListLicenseUsersHandler,
    RemoveUserHandler,
    SetUserActiveHandler,
)
from licenses.application.handlers.validate_license_handlers import (
    ValidateLicenseHandler,
    VerifyDeviceLicenseHandler,
    VerifyUserLicenseHandler,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.get_license_stats import GetLicenseStatsQuery
from licenses.application.queries.list_license_users import ListLicenseUsersQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.registry_provider import get_license_registry

ERROR_RESPONSES = {
    400: {"description": "Bad Request"},
    404: {"description": "License not found"},
    500: {"description": "Registry could not be persisted"},
}


def _validation_response(dto, serializer_class, missing_input_message: str) -> Response:
    """Render a validation DTO; negative outcomes are 200 except missing input."""
    if dto.valid:
        return Response(serializer_class(dto).data)

    body = {"valid": False, "reason": dto.reason.value, "code": dto.reason.code}
    if dto.reason is ValidationReason.MISSING_INPUT:
        body["reason"] = missing_input_message
        return Response(body, status=status.HTTP_400_BAD_REQUEST)
    return Response(body)


def _mutation_response(message: str, license) -> Response:
    return Response(
        {"success": True, "message": message, "license": LicenseSerializer(license).data}
    )


class LicenseListView(APIView):
    """View for listing and issuing licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List every license in the registry in issue order.",
        tags=["Licenses"],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List all licenses."""
        handler = ListLicensesHandler(license_repository=get_license_registry())
        licenses = handler.handle(ListLicensesQuery())
        return Response(LicenseSerializer(licenses, many=True).data)

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Issue a new license for a customer. A fresh key is generated for "
            "every call; the response includes the key and its hash."
        ),
        tags=["Licenses"],
        request=IssueLicenseRequestSerializer,
        responses={201: LicenseMutationResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Issue a license."""
        serializer = IssueLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = IssueLicenseHandler(
            license_repository=get_license_registry(),
            key_prefix=settings.LICENSE_KEY_PREFIX,
        )
        validity_days = data.get("validity_days")
        license = handler.handle(
            IssueLicenseCommand(
                customer_id=data.get("customer_id") or "",
                license_type=data.get("license_type"),
                validity_days=settings.DEFAULT_VALIDITY_DAYS if validity_days is None else validity_days,
                name=data.get("name"),
            )
        )
        return Response(
            {
                "success": True,
                "message": "License created successfully",
                "license": LicenseSerializer(license).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LicenseDetailView(APIView):
    """View for fetching or deleting one license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="Fetch one license by its hash.",
        tags=["Licenses"],
        responses={200: LicenseSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_hash: str) -> Response:
        """Get a license."""
        handler = GetLicenseHandler(license_repository=get_license_registry())
        license = handler.handle(GetLicenseQuery(license_hash=license_hash))
        return Response(LicenseSerializer(license).data)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Remove a license from the registry.",
        tags=["Licenses"],
        responses={200: SuccessResponseSerializer, **ERROR_RESPONSES},
    )
    def delete(self, request: Request, license_hash: str) -> Response:
        """Delete a license."""
        handler = DeleteLicenseHandler(license_repository=get_license_registry())
        handler.handle(DeleteLicenseCommand(license_hash=license_hash))
        return Response({"success": True, "message": "License deleted"})


class SetLicenseActiveView(APIView):
    """View for activating or deactivating a license."""

    active = True

    @extend_schema(
        summary="Set License Activation",
        description="Activate or deactivate a license.",
        tags=["Licenses"],
        request=None,
        responses={200: LicenseMutationResponseSerializer, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_hash: str) -> Response:
        """Toggle the license activation flag."""
        handler = SetLicenseActiveHandler(license_repository=get_license_registry())
        license = handler.handle(SetLicenseActiveCommand(license_hash=license_hash, active=self.active))
        message = "License activated" if self.active else "License deactivated"
        return _mutation_response(message, license)


class ExtendLicenseView(APIView):
    """View for extending a license."""

    @extend_schema(
        operation_id="extend_license",
        summary="Extend License",
        description="Push the expiration date forward by a positive number of days.",
        tags=["Licenses"],
        request=ExtendLicenseRequestSerializer,
        responses={200: LicenseMutationResponseSerializer, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_hash: str) -> Response:
        """Extend a license."""
        serializer = ExtendLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        days_to_add = serializer.validated_data.get("days_to_add")

        handler = ExtendLicenseHandler(license_repository=get_license_registry())
        license = handler.handle(
            ExtendLicenseCommand(license_hash=license_hash, days_to_add=days_to_add)
        )
        return _mutation_response(f"License extended by {days_to_add} days", license)


class LicenseStatsView(APIView):
    """View for registry statistics."""

    @extend_schema(
        operation_id="get_license_stats",
        summary="License Statistics",
        description="Counts of active, inactive, expired and soon-expiring licenses.",
        tags=["Licenses"],
        responses={200: LicenseStatsResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Get registry statistics."""
        handler = GetLicenseStatsHandler(
            license_repository=get_license_registry(),
            expiring_soon_days=settings.EXPIRING_SOON_DAYS,
        )
        stats = handler.handle(GetLicenseStatsQuery())
        return Response(LicenseStatsResponseSerializer(stats).data)


class ValidateLicenseView(APIView):
    """View for validating a license by key."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Validate a license key. A negative outcome is a 200 response with "
            "`valid: false`; a successful validation counts one usage."
        ),
        tags=["Validation"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: KeyValidationResponseSerializer,
            400: ValidationFailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key."""
        serializer = ValidateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = ValidateLicenseHandler(license_repository=get_license_registry())
        dto = handler.handle(
            ValidateLicenseCommand(license_key=serializer.validated_data.get("license_key"))
        )
        return _validation_response(dto, KeyValidationResponseSerializer, "License key not provided")


class VerifyDeviceLicenseView(APIView):
    """View for device-bound license validation."""

    @extend_schema(
        operation_id="verify_device_license",
        summary="Verify License For Device",
        description=(
            "Validate a license for a device. The first successful call binds "
            "the license to the device; other devices are rejected afterwards."
        ),
        tags=["Validation"],
        request=VerifyDeviceLicenseRequestSerializer,
        responses={
            200: DeviceValidationResponseSerializer,
            400: ValidationFailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license for a device."""
        serializer = VerifyDeviceLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = VerifyDeviceLicenseHandler(
            license_repository=get_license_registry(),
            default_license_name=settings.DEFAULT_LICENSE_NAME,
        )
        dto = handler.handle(
            VerifyDeviceLicenseCommand(
                license_key=data.get("license_key"),
                device_id=data.get("device_id"),
            )
        )
        return _validation_response(
            dto, DeviceValidationResponseSerializer, "License key and device ID are required"
        )


class VerifyUserLicenseView(APIView):
    """View for user login validation."""

    @extend_schema(
        operation_id="verify_user_license",
        summary="Verify User License",
        description=(
            "Validate that a user may log in under a license. Successful logins "
            "are recorded in the license's login history."
        ),
        tags=["Validation"],
        request=VerifyUserLicenseRequestSerializer,
        responses={
            200: UserValidationResponseSerializer,
            400: ValidationFailureSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a user login."""
        serializer = VerifyUserLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = VerifyUserLicenseHandler(
            license_repository=get_license_registry(),
            history_limit=settings.LOGIN_HISTORY_LIMIT,
        )
        dto = handler.handle(
            VerifyUserLicenseCommand(
                username=data.get("username"),
                license_key=data.get("license_key"),
            )
        )
        return _validation_response(
            dto, UserValidationResponseSerializer, "Username and license key are required"
        )


class LicenseUsersView(APIView):
    """View for a license's user roster."""

    @extend_schema(
        operation_id="list_license_users",
        summary="List License Users",
        description="List the users assigned to a license.",
        tags=["Users"],
        responses={200: LicenseUsersResponseSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_hash: str) -> Response:
        """List users of a license."""
        handler = ListLicenseUsersHandler(license_repository=get_license_registry())
        dto = handler.handle(ListLicenseUsersQuery(license_hash=license_hash))
        return Response(LicenseUsersResponseSerializer(dto).data)

    @extend_schema(
        operation_id="add_license_user",
        summary="Add License User",
        description="Assign a user to a license. Usernames are unique per license.",
        tags=["Users"],
        request=AddUserRequestSerializer,
        responses={201: UserMutationResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request, license_hash: str) -> Response:
        """Add a user to a license."""
        serializer = AddUserRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = AddUserHandler(license_repository=get_license_registry())
        user = handler.handle(
            AddUserCommand(
                license_hash=license_hash,
                username=data.get("username") or "",
                role=data.get("role"),
            )
        )
        return Response(
            {
                "success": True,
                "message": "User added to license",
                "user": UserAssignmentSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LicenseUserDetailView(APIView):
    """View for one user of a license."""

    @extend_schema(
        operation_id="set_license_user_active",
        summary="Activate/Deactivate License User",
        description="Set the activation flag of an assigned user.",
        tags=["Users"],
        request=SetUserActiveRequestSerializer,
        responses={200: UserMutationResponseSerializer, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_hash: str, username: str) -> Response:
        """Activate or deactivate a user."""
        serializer = SetUserActiveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        is_active = serializer.validated_data["is_active"]

        handler = SetUserActiveHandler(license_repository=get_license_registry())
        user = handler.handle(
            SetUserActiveCommand(license_hash=license_hash, username=username, is_active=is_active)
        )
        return Response(
            {
                "success": True,
                "message": "User activated" if is_active else "User deactivated",
                "user": UserAssignmentSerializer(user).data,
            }
        )

    @extend_schema(
        operation_id="remove_license_user",
        summary="Remove License User",
        description="Remove a user from a license.",
        tags=["Users"],
        responses={200: SuccessResponseSerializer, **ERROR_RESPONSES},
    )
    def delete(self, request: Request, license_hash: str, username: str) -> Response:
        """Remove a user from a license."""
        handler = RemoveUserHandler(license_repository=get_license_registry())
        handler.handle(RemoveUserCommand(license_hash=license_hash, username=username))
        return Response({"success": True, "message": "User removed from license"})
