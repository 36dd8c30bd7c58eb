"""OpenTelemetry module for replaying captured spans.

This module provides OpenTelemetry integration for emitting spans that
keep the identifiers and timestamps recorded by the database.

Submodules:
- ids: Identifier widening and the replay IdGenerator
- context: Parent context reconstruction
- attributes: Span attributes from execution metrics
- exporter: OTLP exporter setup
- tracer: Tracer provider creation and shutdown
- replayer: Span replay
"""

from spanreplay.tracing.otel.attributes import build_span_attributes
from spanreplay.tracing.otel.context import parent_context, parent_span_context
from spanreplay.tracing.otel.exporter import (
    setup_otel_exporter,
    wait_for_collector,
)
from spanreplay.tracing.otel.ids import (
    PendingSpanIds,
    ReplayIdGenerator,
    narrow_id,
    span_id_bytes,
    trace_id_bytes,
    widen_span_id,
    widen_trace_id,
)
from spanreplay.tracing.otel.replayer import SpanReplayer
from spanreplay.tracing.otel.tracer import (
    create_tracer_provider,
    flush_and_shutdown,
)

__all__ = [
    "build_span_attributes",
    "parent_context",
    "parent_span_context",
    "setup_otel_exporter",
    "wait_for_collector",
    "PendingSpanIds",
    "ReplayIdGenerator",
    "narrow_id",
    "span_id_bytes",
    "trace_id_bytes",
    "widen_span_id",
    "widen_trace_id",
    "SpanReplayer",
    "create_tracer_provider",
    "flush_and_shutdown",
]
