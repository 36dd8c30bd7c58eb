"""Replay of captured span records through the OpenTelemetry SDK."""

import logging
from collections.abc import Iterable

from opentelemetry import trace

from spanreplay.models import SpanRecord
from spanreplay.tracing.otel.attributes import build_span_attributes
from spanreplay.tracing.otel.context import parent_context
from spanreplay.tracing.otel.ids import (
    PendingSpanIds,
    widen_span_id,
    widen_trace_id,
)

logger = logging.getLogger("spanreplay")


class SpanReplayer:
    """Emits one span per captured record, keeping its identifiers.

    The tracer must come from a provider whose IdGenerator reads
    ``pending_ids`` (see ``create_tracer_provider``). Records must be
    replayed one at a time: the pending identifiers are a single slot
    shared with the SDK.
    """

    def __init__(self, tracer: trace.Tracer, pending_ids: PendingSpanIds):
        """Initialize the replayer.

        Args:
            tracer: Tracer of the replay provider
            pending_ids: Slot read by the provider's IdGenerator
        """
        self.tracer = tracer
        self.pending_ids = pending_ids

    def replay(self, record: SpanRecord) -> trace.Span:
        """Emit the span for a single record.

        The span is started with the record's start time under a parent
        context built from its trace and parent IDs, and ended right away
        at start time plus duration.

        Args:
            record: The captured span record

        Returns:
            The ended span
        """
        logger.debug(
            f"traceId: {record.trace_id}, parentId: {record.parent_id}, "
            f"spanId: {record.span_id}, span_operation: {record.span_operation}, "
            f"start: {record.span_start}, start_ns: {record.span_start_ns}, "
            f"duration: {record.duration}"
        )
        context = parent_context(record.trace_id, record.parent_id)
        start_time = record.start_time_ns

        # Read by the IdGenerator during start_span
        self.pending_ids.set(
            widen_trace_id(record.trace_id), widen_span_id(record.span_id)
        )
        span = self.tracer.start_span(
            name=record.name,
            context=context,
            kind=trace.SpanKind.SERVER,
            attributes=build_span_attributes(record),
            start_time=start_time,
        )
        span.end(end_time=start_time + record.duration)
        return span

    def replay_all(self, records: Iterable[SpanRecord]) -> int:
        """Replay records in order.

        Args:
            records: Records ordered by start time

        Returns:
            Number of spans emitted
        """
        count = 0
        for record in records:
            self.replay(record)
            count += 1
        return count
