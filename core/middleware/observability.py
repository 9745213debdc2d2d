"""
Observability middleware.

Every dashboard request gets a correlation id (reused from the
``X-Correlation-ID`` header when the caller sends one) and one
structured log line on completion, carrying the owner, the application
from the URL and the active OpenTelemetry trace.
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "HTTP_X_CORRELATION_ID"


def _trace_fields() -> Dict[str, str]:
    """Trace and span ids of the current span, if one is recording."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format_trace_id(span_context.trace_id),
        "span_id": format_span_id(span_context.span_id),
    }


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Sets ``request.correlation_id`` and answers with ``X-Correlation-ID``,
    ``X-Request-Duration`` and, when tracing is on, ``X-Trace-ID``.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.META.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        started = time.perf_counter()

        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **self._request_fields(request, correlation_id),
                    "error_type": type(e).__name__,
                    "duration_ms": self._elapsed_ms(started),
                },
                exc_info=True,
            )
            raise

        duration_ms = self._elapsed_ms(started)
        outcome = _outcome(response.status_code)
        fields = {
            **self._request_fields(request, correlation_id),
            "request_status": outcome,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
        level = {"server_error": logging.ERROR, "client_error": logging.WARNING}.get(
            outcome, logging.INFO
        )
        logger.log(
            level,
            "%s %s -> %d",
            request.method,
            request.path,
            response.status_code,
            extra=fields,
        )

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Duration"] = f"{duration_ms / 1000:.3f}"
        if "trace_id" in fields:
            response["X-Trace-ID"] = fields["trace_id"]
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)

    @staticmethod
    def _request_fields(request: HttpRequest, correlation_id: str) -> Dict[str, object]:
        """Log fields describing who called what."""
        fields: Dict[str, object] = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            **_trace_fields(),
        }
        owner = getattr(request, "owner", None)
        if owner is not None:
            fields["owner_id"] = owner.pk
        application_id = _application_id(request)
        if application_id:
            fields["application_id"] = application_id
        return fields


def _application_id(request: HttpRequest) -> Optional[str]:
    """Application id captured by the URL resolver, if the route has one."""
    resolver_match = getattr(request, "resolver_match", None)
    if resolver_match is None:
        return None
    application_id = resolver_match.kwargs.get("application_id")
    return str(application_id) if application_id else None
