"""One-shot replay of captured spans into an OTLP collector.

This module provides the ReplayRun class that encapsulates a complete
run, including:
- OpenTelemetry setup with the replay IdGenerator
- A single drain of the span source
- Span replay
- Provider flush and shutdown

The CLI layer should only need to create a ReplayRun instance and call
run().
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import SpanExporter

from spanreplay.config import Config
from spanreplay.exceptions import ExporterFlushError, ExporterSetupError
from spanreplay.source import DatabaseSpanSource, SpanSource
from spanreplay.tracing.otel import (
    PendingSpanIds,
    SpanReplayer,
    create_tracer_provider,
    flush_and_shutdown,
    setup_otel_exporter,
    wait_for_collector,
)

logger = logging.getLogger("spanreplay")


@dataclass
class ReplaySummary:
    """Outcome of a replay run."""

    span_count: int
    elapsed_seconds: float
    interrupted: bool = False


class ReplayRun:
    """Drains the span source once and replays every record.

    Example:
        >>> from spanreplay.config import load_config
        >>> summary = ReplayRun(load_config("config.yaml")).run()
        >>> print(summary.span_count)
    """

    def __init__(
        self,
        config: Config,
        source: Optional[SpanSource] = None,
        exporter: Optional[SpanExporter] = None,
        span_processor: Optional[SpanProcessor] = None,
    ):
        """Initialize the run.

        Args:
            config: Configuration object
            source: Span source, a DatabaseSpanSource by default
            exporter: Span exporter, an OTLP gRPC exporter by default
            span_processor: Processor replacing the BatchSpanProcessor
        """
        self.config = config
        self._source = source
        self._exporter = exporter
        self._span_processor = span_processor
        self._provider: Optional[TracerProvider] = None
        self._pending_ids = PendingSpanIds()

    def _setup_otel(self) -> SpanReplayer:
        """Set up the exporter, the tracer provider and the replayer."""
        exporter_config = self.config.exporter
        if self._exporter is None:
            if exporter_config.wait_for_collector:
                wait_for_collector(
                    exporter_config.endpoint,
                    exporter_config.connect_timeout,
                    insecure=exporter_config.insecure,
                )
            logger.info(
                f"Setting up OpenTelemetry with endpoint: {exporter_config.endpoint}"
            )
            try:
                self._exporter = setup_otel_exporter(
                    exporter_config.endpoint,
                    insecure=exporter_config.insecure,
                    timeout=exporter_config.export_timeout,
                )
            except Exception as e:
                raise ExporterSetupError(
                    f"Failed to create trace exporter: {e}",
                    "Check the exporter section of the configuration",
                ) from e

        tracer, self._provider = create_tracer_provider(
            self._exporter,
            self._pending_ids,
            self.config.service_name,
            span_processor=self._span_processor,
        )
        logger.info("OpenTelemetry tracer initialized")
        return SpanReplayer(tracer, self._pending_ids)

    def _shutdown(self, failed: bool) -> None:
        # _provider is unset when setup did not get that far
        if self._provider is None:
            return
        try:
            flush_and_shutdown(
                self._provider, self.config.exporter.flush_timeout_millis
            )
        except ExporterFlushError as e:
            if not failed:
                raise
            # keep the error that stopped the run
            logger.error(f"Failed to flush spans: {e}")

    def run(self) -> ReplaySummary:
        """Replay all currently captured spans, then flush.

        A KeyboardInterrupt, during setup or while reading rows, stops the
        run; the spans emitted so far are still flushed.

        Returns:
            Summary of the run

        Raises:
            SpanReplayError: On any setup, query, decode or flush failure
        """
        start = time.time()
        span_count = 0
        interrupted = False
        failed = True
        try:
            replayer = self._setup_otel()
            source = self._source or DatabaseSpanSource(self.config.source)
            with source:
                for record in source.read():
                    replayer.replay(record)
                    span_count += 1
            failed = False
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping replay...")
            interrupted = True
            failed = False
        finally:
            self._shutdown(failed)

        elapsed = time.time() - start
        logger.info(
            f"Replay completed: {span_count} spans replayed "
            f"in {elapsed:.3f} seconds"
        )
        return ReplaySummary(
            span_count=span_count,
            elapsed_seconds=elapsed,
            interrupted=interrupted,
        )
