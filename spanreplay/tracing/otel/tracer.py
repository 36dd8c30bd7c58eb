"""OpenTelemetry tracer creation and provider setup."""

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from spanreplay.exceptions import ExporterFlushError
from spanreplay.log import logger
from spanreplay.tracing.otel.ids import PendingSpanIds, ReplayIdGenerator

TRACER_NAME = "pgtracing-tracer"


def _service_version() -> str:
    try:
        return version("spanreplay")
    except PackageNotFoundError:
        return "0.0.0"


def create_tracer_provider(
    exporter: SpanExporter,
    pending_ids: PendingSpanIds,
    service_name: str,
    span_processor: Optional[SpanProcessor] = None,
) -> tuple[trace.Tracer, TracerProvider]:
    """Create the tracer replaying captured spans.

    The provider generates identifiers from ``pending_ids`` and samples
    every span.

    Args:
        exporter: The exporter the batch processor ships spans to
        pending_ids: Slot holding the identifiers of the next span
        service_name: Value of the ``service.name`` resource attribute
        span_processor: Processor to use instead of a BatchSpanProcessor

    Returns:
        Tuple of (tracer, provider)
    """
    resource = Resource(
        attributes={
            "service.name": service_name,
            "service.version": _service_version(),
        }
    )
    provider = TracerProvider(
        sampler=ALWAYS_ON,
        resource=resource,
        id_generator=ReplayIdGenerator(pending_ids),
    )
    provider.add_span_processor(span_processor or BatchSpanProcessor(exporter))
    return provider.get_tracer(TRACER_NAME), provider


def flush_and_shutdown(
    provider: TracerProvider, timeout_millis: int = 30000
) -> None:
    """Flush every buffered span, then shut the provider down.

    Args:
        provider: The tracer provider to shut down
        timeout_millis: Time allowed for the flush

    Raises:
        ExporterFlushError: If the flush did not complete in time
    """
    logger.info("Flushing spans...")
    try:
        flushed = provider.force_flush(timeout_millis)
    finally:
        provider.shutdown()
    if not flushed:
        raise ExporterFlushError(
            f"Spans were not flushed within {timeout_millis} ms",
            "Check that the collector is reachable",
        )
    logger.info("Tracer provider shut down")
