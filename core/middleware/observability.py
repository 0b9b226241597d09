"""
Observability middleware.

Adds correlation ids, structured request/response logging and the
active trace id to every response.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates (or propagates) correlation IDs for request tracing
    2. Logs request/response information with the calling origin
    3. Adds correlation ID and duration to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        trace_id, span_id = self._trace_context()

        start_time = time.monotonic()
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "origin": request.headers.get("Origin") or request.headers.get("Referer", ""),
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = span_id

        logger.info("Request started", extra=log_extra)

        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **log_extra,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.monotonic() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.monotonic() - start_time
        log_extra.update(
            {
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            }
        )
        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed successfully", extra=log_extra)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    @staticmethod
    def _trace_context() -> tuple[Optional[str], Optional[str]]:
        span_context = trace.get_current_span().get_span_context()
        if not span_context.is_valid:
            return None, None
        return format_trace_id(span_context.trace_id), format_span_id(span_context.span_id)
