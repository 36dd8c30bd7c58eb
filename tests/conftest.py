"""Shared fixtures for spanreplay tests."""

import logging
from datetime import datetime, timezone

import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from spanreplay.models import SpanRecord
from spanreplay.tracing.otel import (
    PendingSpanIds,
    SpanReplayer,
    create_tracer_provider,
)

BASE_START = datetime(2024, 3, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)


def make_record(**overrides) -> SpanRecord:
    """Build a SpanRecord with sensible defaults."""
    values = dict(
        trace_id=1,
        parent_id=0,
        span_id=10,
        span_type="Planner",
        span_operation="Planner",
        span_start=BASE_START,
        span_start_ns=0,
        duration=100,
        sql_error_code="00000",
    )
    values.update(overrides)
    return SpanRecord(**values)


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo init_logger() so caplog keeps seeing spanreplay records."""
    yield
    logger = logging.getLogger("spanreplay")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv("SPANREPLAY_CONFIG", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


@pytest.fixture
def memory_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def replay_provider(memory_exporter):
    """Tracer provider wired like production, exporting synchronously."""
    pending_ids = PendingSpanIds()
    tracer, provider = create_tracer_provider(
        memory_exporter,
        pending_ids,
        "PostgreSQL-server",
        span_processor=SimpleSpanProcessor(memory_exporter),
    )
    yield tracer, provider, pending_ids
    provider.shutdown()


@pytest.fixture
def replayer(replay_provider):
    tracer, _, pending_ids = replay_provider
    return SpanReplayer(tracer, pending_ids)


@pytest.fixture
def record_factory():
    return make_record
