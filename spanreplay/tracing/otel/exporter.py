"""OpenTelemetry OTLP exporter setup."""

from typing import Optional

import grpc
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)

from spanreplay.exceptions import ExporterSetupError
from spanreplay.log import logger


def setup_otel_exporter(
    endpoint: str, insecure: bool = True, timeout: Optional[int] = None
) -> OTLPSpanExporter:
    """Setup OpenTelemetry OTLP exporter.

    Args:
        endpoint: The OTLP gRPC endpoint, e.g. ``localhost:4317``
        insecure: Whether to use an insecure channel
        timeout: Export timeout in seconds

    Returns:
        Configured OTLPSpanExporter instance
    """
    return OTLPSpanExporter(
        endpoint=endpoint,
        insecure=insecure,
        timeout=timeout,
    )


def _channel_target(endpoint: str) -> str:
    for scheme in ("http://", "https://"):
        if endpoint.startswith(scheme):
            endpoint = endpoint[len(scheme) :]
    return endpoint.rstrip("/")


def _open_channel(target: str, insecure: bool) -> grpc.Channel:
    # must match the transport the OTLP exporter will use
    if insecure:
        return grpc.insecure_channel(target)
    return grpc.secure_channel(target, grpc.ssl_channel_credentials())


def wait_for_collector(
    endpoint: str, timeout: float, insecure: bool = True
) -> None:
    """Block until the collector accepts a gRPC connection.

    Args:
        endpoint: The OTLP gRPC endpoint
        timeout: Seconds to wait before giving up
        insecure: Connect without TLS

    Raises:
        ExporterSetupError: If the collector is not reachable in time
    """
    logger.info("Waiting for connection...")
    channel = _open_channel(_channel_target(endpoint), insecure)
    try:
        grpc.channel_ready_future(channel).result(timeout=timeout)
    except grpc.FutureTimeoutError as e:
        raise ExporterSetupError(
            f"Failed to create gRPC connection to collector at {endpoint}",
            "Verify the endpoint, the TLS setting and that the collector "
            "is running",
        ) from e
    finally:
        channel.close()
    logger.info(f"Collector at {endpoint} is reachable")
