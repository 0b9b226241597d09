"""
OpenTelemetry instrumentation setup.

Configures tracing for the service. Spans are always created through the
API; they are only exported when an OTLP endpoint is configured.
"""

import logging

from django.conf import settings
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode  # noqa: F401

logger = logging.getLogger(__name__)

_configured = False


def setup_opentelemetry() -> None:
    """
    Configure OpenTelemetry instrumentation.

    Sets up a tracer provider with an OTLP exporter and Django
    auto-instrumentation. Does nothing without OTEL_EXPORTER_OTLP_ENDPOINT.
    """
    global _configured
    if _configured:
        return

    endpoint = getattr(settings, "OTEL_EXPORTER_OTLP_ENDPOINT", "")
    if not endpoint:
        logger.info("No OTLP endpoint configured, traces are not exported")
        return

    resource = Resource.create(
        {
            "service.name": getattr(settings, "OTEL_SERVICE_NAME", "license-manager-service"),
            "service.version": "1.0.0",
        }
    )
    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(trace_provider)

    DjangoInstrumentor().instrument()

    _configured = True
    logger.info("OpenTelemetry instrumentation configured", extra={"endpoint": endpoint})


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)
    """
    return trace.get_tracer(name)
