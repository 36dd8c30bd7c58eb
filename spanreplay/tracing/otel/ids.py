"""Identifier widening and the replay ID generator.

Captured identifiers are 64-bit values. OpenTelemetry trace IDs are 128
bits and span IDs 64 bits; a captured value is placed in the low-order
bytes of a zero-padded identifier.

The SDK creates span IDs through its ``IdGenerator`` and offers no
per-call way to choose one. ``ReplayIdGenerator`` therefore reads the
identifiers from a ``PendingSpanIds`` slot which the replayer fills right
before each ``start_span`` call. Span emission must stay strictly
sequential for that handshake to hold.
"""

from dataclasses import dataclass
from typing import Optional

from opentelemetry.sdk.trace.id_generator import IdGenerator

ID_MASK_64 = (1 << 64) - 1


def _to_unsigned(value: int) -> int:
    return value & ID_MASK_64


def widen_trace_id(value: int) -> int:
    """Widen a captured 64-bit trace ID into the 128-bit trace ID space.

    Args:
        value: Captured trace ID, signed or unsigned

    Returns:
        128-bit trace ID whose high 64 bits are zero
    """
    return _to_unsigned(value)


def widen_span_id(value: int) -> int:
    """Widen a captured 64-bit span ID into the 64-bit span ID space.

    Args:
        value: Captured span ID, signed or unsigned

    Returns:
        Unsigned 64-bit span ID
    """
    return _to_unsigned(value)


def narrow_id(value: int, signed: bool = False) -> int:
    """Read back the low 64 bits of a widened identifier.

    Args:
        value: A widened trace or span ID
        signed: Return the value as a signed ``bigint``

    Returns:
        The captured identifier
    """
    low = value & ID_MASK_64
    if signed and low >= 1 << 63:
        return low - (1 << 64)
    return low


def trace_id_bytes(value: int) -> bytes:
    """Big-endian 16 byte form of a widened trace ID, as sent over OTLP."""
    return widen_trace_id(value).to_bytes(16, "big")


def span_id_bytes(value: int) -> bytes:
    """Big-endian 8 byte form of a widened span ID, as sent over OTLP."""
    return widen_span_id(value).to_bytes(8, "big")


@dataclass(frozen=True)
class SpanIds:
    trace_id: int
    span_id: int


class PendingSpanIds:
    """Single-writer single-reader slot for the next span's identifiers."""

    def __init__(self):
        self._current: Optional[SpanIds] = None

    def set(self, trace_id: int, span_id: int) -> None:
        """Set the identifiers the next created span must use.

        Args:
            trace_id: Widened trace ID
            span_id: Widened span ID
        """
        self._current = SpanIds(trace_id=trace_id, span_id=span_id)

    def current(self) -> SpanIds:
        """Return the identifiers most recently set.

        Raises:
            RuntimeError: If nothing was set yet
        """
        if self._current is None:
            raise RuntimeError("No pending span IDs have been set")
        return self._current


class ReplayIdGenerator(IdGenerator):
    """IdGenerator returning the pending identifiers instead of random ones.

    ``generate_trace_id`` is only called by the SDK for spans without a
    valid parent, i.e. captured spans whose parent ID is zero.
    """

    def __init__(self, pending: PendingSpanIds):
        self.pending = pending

    def generate_span_id(self) -> int:
        return self.pending.current().span_id

    def generate_trace_id(self) -> int:
        return self.pending.current().trace_id
