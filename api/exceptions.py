"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Errors are rendered as ``{"error": <message>, "code": <CODE>}`` so that
clients can test ``error`` for truthiness.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    DuplicateDomainError,
    InvalidSecretError,
    LicenseNotFoundError,
    LicenseRequestNotFoundError,
    ModuleNotFoundError,
    RemoteStoreError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

NOT_FOUND_ERRORS = (LicenseNotFoundError, LicenseRequestNotFoundError, ModuleNotFoundError)


def error_body(message: str, code: str, **extra: Any) -> Dict[str, Any]:
    return {"error": message, "code": code, **extra}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, ValueError):
        logger.info("Invalid request: %s", exc, extra={"trace_id": trace_id})
        response = Response(
            error_body(str(exc), "INVALID_REQUEST"), status=status.HTTP_400_BAD_REQUEST
        )
    elif isinstance(exc, APIException):
        response = _handle_api_exception(exc, context)
    elif isinstance(exc, Http404):
        response = Response(
            error_body("Resource not found", "NOT_FOUND"), status=status.HTTP_404_NOT_FOUND
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    errors_total.labels(
        error_type=response.data.get("code", "UNKNOWN"), endpoint=_get_path(context)
    ).inc()
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_path(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request else ""


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NOT_FOUND_ERRORS):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidSecretError):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, DuplicateDomainError):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, RemoteStoreError):
        status_code = status.HTTP_502_BAD_GATEWAY

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.message, exc.code), status=status_code)


def _handle_api_exception(exc: APIException, context: Dict[str, Any]) -> Response:
    response = exception_handler(exc, context)
    code = exc.default_code.upper().replace("-", "_")
    if isinstance(exc, ValidationError):
        response.data = error_body("Invalid request", code, details=response.data)
    else:
        response.data = error_body(str(response.data.get("detail", exc.default_detail)), code)
    return response


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("An internal error occurred", "INTERNAL_ERROR"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
