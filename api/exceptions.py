"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    LicenseNotFoundError,
    PersistenceError,
    UserNotFoundError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def error_body(code: str, message: str) -> Dict[str, Any]:
    """Build the standard error payload."""
    return {"error": {"code": code, "message": message}}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc)
    elif isinstance(exc, DRFValidationError):
        response = Response(
            error_body("VALIDATION_ERROR", _first_error_message(exc.detail)),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = error_body(code, str(exc.detail))
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc)

    errors_total.labels(
        error_type=type(exc).__name__,
        endpoint=_get_endpoint(context),
    ).inc()
    if correlation_id:
        response[CORRELATION_HEADER] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _get_endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return type(view).__name__ if view is not None else "unknown"


def _first_error_message(detail: Any) -> str:
    """Flatten DRF error details into a single message."""
    if isinstance(detail, dict):
        for field, errors in detail.items():
            message = _first_error_message(errors)
            return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return _first_error_message(detail[0])
    return str(detail) if detail else "Invalid input"


def _handle_domain_exception(exc: DomainException) -> Response:
    """Handle domain-specific exceptions."""
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure: %s", exc.message)
        return Response(
            error_body(exc.code, "An internal error occurred"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (LicenseNotFoundError, UserNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND

    logger.warning("Domain exception: %s - %s", exc.code, exc.message)
    return Response(error_body(exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(exc: Exception) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
