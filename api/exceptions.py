"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body has the shape ``{"error": {"code", "kind", "message"}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    NotAuthenticated,
    ParseError,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    UnauthorizedError.kind: status.HTTP_401_UNAUTHORIZED,
    NotFoundError.kind: status.HTTP_404_NOT_FOUND,
    InvalidInputError.kind: status.HTTP_400_BAD_REQUEST,
    ConflictError.kind: status.HTTP_409_CONFLICT,
}


def error_body(code: str, kind: str, message: str, details: Any = None) -> Dict[str, Any]:
    """Build the error envelope shared by every API error response."""
    error = {"code": code, "kind": kind, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


def validation_error_response(errors: Any) -> Response:
    """Render serializer errors as an invalid-input response."""
    return Response(
        error_body(
            "INVALID_INPUT", InvalidInputError.kind, "Request validation failed", details=errors
        ),
        status=status.HTTP_400_BAD_REQUEST,
    )


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, (ValidationError, ParseError)):
        response = validation_error_response(exc.detail)
    elif isinstance(exc, NotAuthenticated):
        response = Response(
            error_body("UNAUTHORIZED", UnauthorizedError.kind, "Unauthorized"),
            status=status.HTTP_401_UNAUTHORIZED,
        )
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", NotFoundError.kind, "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail)
        response.data = error_body(code, "api_error", str(detail))
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return view.__class__.__name__ if view else "unknown"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.code, exc.kind, exc.message), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "internal_error", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
