"""OpenTelemetry parent context reconstruction for captured spans."""

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from spanreplay.tracing.otel.ids import widen_span_id, widen_trace_id


def parent_span_context(trace_id: int, parent_id: int) -> SpanContext:
    """Create the span context of a captured span's parent.

    Args:
        trace_id: Captured trace ID
        parent_id: Captured parent span ID

    Returns:
        A remote, sampled SpanContext with the widened identifiers. It is
        invalid when the parent ID is zero.
    """
    return SpanContext(
        trace_id=widen_trace_id(trace_id),
        span_id=widen_span_id(parent_id),
        is_remote=True,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )


def parent_context(trace_id: int, parent_id: int) -> Context:
    """Create a context whose current span is the captured parent.

    Args:
        trace_id: Captured trace ID
        parent_id: Captured parent span ID

    Returns:
        A fresh Context to pass to ``Tracer.start_span``
    """
    return trace.set_span_in_context(
        NonRecordingSpan(parent_span_context(trace_id, parent_id)),
        Context(),
    )
