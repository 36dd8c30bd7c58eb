from spanreplay.tracing.otel import (
    PendingSpanIds,
    ReplayIdGenerator,
    SpanReplayer,
    build_span_attributes,
    create_tracer_provider,
    flush_and_shutdown,
    setup_otel_exporter,
)
from spanreplay.tracing.replay import ReplayRun, ReplaySummary

__all__ = [
    "PendingSpanIds",
    "ReplayIdGenerator",
    "SpanReplayer",
    "build_span_attributes",
    "create_tracer_provider",
    "flush_and_shutdown",
    "setup_otel_exporter",
    "ReplayRun",
    "ReplaySummary",
]
