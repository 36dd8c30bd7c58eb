"""Data models for captured query execution spans."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Optional

from spanreplay.exceptions import RecordDecodeError
from spanreplay.utils import datetime_to_ns

SQL_SUCCESS_CODE = "00000"


@dataclass(frozen=True)
class SpanRecord:
    """One row of the span capture relation.

    Identifiers are the raw 64-bit values stored by the capture mechanism
    (signed ``bigint``). Timing is the wall-clock start plus the
    nanosecond remainder the timestamp type cannot hold, and the duration
    in nanoseconds. Every metric is optional.
    """

    trace_id: int
    parent_id: int
    span_id: int

    span_type: str
    span_operation: str
    span_start: datetime
    span_start_ns: int
    duration: int

    deparse_info: Optional[str] = None
    parameters: Optional[str] = None

    startup: Optional[int] = None
    pid: Optional[int] = None
    subxact_count: Optional[int] = None
    sql_error_code: Optional[str] = None
    rows: Optional[int] = None

    plan_startup_cost: Optional[float] = None
    plan_total_cost: Optional[float] = None
    plan_rows: Optional[float] = None
    plan_width: Optional[int] = None

    shared_blks_hit: Optional[int] = None
    shared_blks_read: Optional[int] = None
    shared_blks_dirtied: Optional[int] = None
    shared_blks_written: Optional[int] = None
    local_blks_hit: Optional[int] = None
    local_blks_read: Optional[int] = None
    local_blks_dirtied: Optional[int] = None
    local_blks_written: Optional[int] = None
    blk_read_time: Optional[float] = None
    blk_write_time: Optional[float] = None

    temp_blks_read: Optional[int] = None
    temp_blks_written: Optional[int] = None
    temp_blk_read_time: Optional[float] = None
    temp_blk_write_time: Optional[float] = None

    wal_records: Optional[int] = None
    wal_fpi: Optional[int] = None
    wal_bytes: Optional[int] = None

    jit_functions: Optional[int] = None
    jit_generation_time: Optional[float] = None
    jit_inlining_time: Optional[float] = None
    jit_optimization_time: Optional[float] = None
    jit_emission_time: Optional[float] = None

    @property
    def name(self) -> str:
        """Span name: the operation, followed by the deparse info if any."""
        if self.deparse_info:
            return f"{self.span_operation} {self.deparse_info}"
        return self.span_operation

    @property
    def start_time_ns(self) -> int:
        return datetime_to_ns(self.span_start) + self.span_start_ns

    @property
    def end_time_ns(self) -> int:
        return self.start_time_ns + self.duration

    @property
    def has_error(self) -> bool:
        return bool(self.sql_error_code) and (
            self.sql_error_code != SQL_SUCCESS_CODE
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SpanRecord":
        """Map a result row onto a SpanRecord.

        Args:
            row: Mapping of column name to value, e.g. ``Row._mapping``

        Returns:
            The decoded record

        Raises:
            RecordDecodeError: If a required column is missing or NULL, or
                a value has an unexpected type
        """
        values: dict[str, Any] = {}
        try:
            for name in _REQUIRED_INT_COLUMNS:
                values[name] = _require_int(row, name)
            for name in _REQUIRED_STR_COLUMNS:
                values[name] = _require(row, name, str)
            values["span_start"] = _require(row, "span_start", datetime)

            for name in _OPTIONAL_STR_COLUMNS:
                values[name] = _optional(row, name, str)
            for name in _OPTIONAL_INT_COLUMNS:
                values[name] = _optional(row, name, int)
            for name in _OPTIONAL_FLOAT_COLUMNS:
                values[name] = _optional(row, name, float)
        except (KeyError, TypeError, ValueError) as e:
            raise RecordDecodeError(
                f"Failed to decode span row: {e}",
                "The capture relation may not match the expected columns",
            ) from e
        return cls(**values)


def _require(row: Mapping[str, Any], name: str, kind: type) -> Any:
    value = row[name]
    if value is None:
        raise ValueError(f"column {name!r} is NULL")
    if not isinstance(value, kind):
        raise TypeError(
            f"column {name!r} has type {type(value).__name__}, "
            f"expected {kind.__name__}"
        )
    return value


def _require_int(row: Mapping[str, Any], name: str) -> int:
    value = row[name]
    if value is None:
        raise ValueError(f"column {name!r} is NULL")
    if isinstance(value, (bool, float, str)):
        raise TypeError(
            f"column {name!r} has type {type(value).__name__}, expected int"
        )
    return int(value)


def _optional(row: Mapping[str, Any], name: str, kind: type) -> Any:
    # Metric columns are allowed to be absent from the row
    value = row.get(name)
    if value is None:
        return None
    if kind is str:
        return str(value)
    # numeric columns arrive as Decimal
    return kind(value)


_FIELD_NAMES = [f.name for f in fields(SpanRecord)]

_REQUIRED_INT_COLUMNS = [
    "trace_id",
    "parent_id",
    "span_id",
    "span_start_ns",
    "duration",
]
_REQUIRED_STR_COLUMNS = ["span_type", "span_operation"]
_OPTIONAL_STR_COLUMNS = ["deparse_info", "parameters", "sql_error_code"]
_OPTIONAL_FLOAT_COLUMNS = [
    "plan_startup_cost",
    "plan_total_cost",
    "plan_rows",
    "blk_read_time",
    "blk_write_time",
    "temp_blk_read_time",
    "temp_blk_write_time",
    "jit_generation_time",
    "jit_inlining_time",
    "jit_optimization_time",
    "jit_emission_time",
]
_OPTIONAL_INT_COLUMNS = [
    name
    for name in _FIELD_NAMES
    if name
    not in (
        _REQUIRED_INT_COLUMNS
        + _REQUIRED_STR_COLUMNS
        + _OPTIONAL_STR_COLUMNS
        + _OPTIONAL_FLOAT_COLUMNS
        + ["span_start"]
    )
]

# Column list in the order the source query selects them
SPAN_COLUMNS = list(_FIELD_NAMES)
