"""
Structured logging helpers.

JSON log lines carry the active OpenTelemetry trace and span ids so that
log aggregation can be joined with traces.
"""

from opentelemetry import trace
from pythonjsonlogger import jsonlogger


class TraceJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")
