"""Span attribute construction for captured spans."""

from typing import Optional, Union

from opentelemetry.util.types import AttributeValue

from spanreplay.models import SpanRecord
from spanreplay.utils import parse_parameters

# Attribute key -> SpanRecord field, in emission order
METRIC_ATTRIBUTES = [
    ("rows", "rows"),
    ("pid", "pid"),
    ("subxact_count", "subxact_count"),
    ("block.shared.hit", "shared_blks_hit"),
    ("block.shared.read", "shared_blks_read"),
    ("block.shared.dirtied", "shared_blks_dirtied"),
    ("block.shared.written", "shared_blks_written"),
    ("block.local.hit", "local_blks_hit"),
    ("block.local.read", "local_blks_read"),
    ("block.local.dirtied", "local_blks_dirtied"),
    ("block.local.written", "local_blks_written"),
    ("block.read_time", "blk_read_time"),
    ("block.write_time", "blk_write_time"),
    ("block.temp.read", "temp_blks_read"),
    ("block.temp.written", "temp_blks_written"),
    ("block.temp.read_time", "temp_blk_read_time"),
    ("block.temp.write_time", "temp_blk_write_time"),
    ("wal.records", "wal_records"),
    ("wal.fpi", "wal_fpi"),
    ("wal.bytes", "wal_bytes"),
    ("plan.startup_cost", "plan_startup_cost"),
    ("plan.total_cost", "plan_total_cost"),
    ("plan.rows", "plan_rows"),
    ("plan.width", "plan_width"),
    ("jit.functions", "jit_functions"),
    ("jit.generation_time", "jit_generation_time"),
    ("jit.inlining_time", "jit_inlining_time"),
    ("jit.optimization_time", "jit_optimization_time"),
    ("jit.emission_time", "jit_emission_time"),
]

ERROR_MESSAGE = "Query error"


def set_metric_if_value(
    attributes: dict[str, AttributeValue],
    key: str,
    value: Optional[Union[int, float]],
) -> None:
    """Add a metric attribute unless it is absent or zero."""
    if value is None or value == 0:
        return
    attributes[key] = value


def build_span_attributes(record: SpanRecord) -> dict[str, AttributeValue]:
    """Build the attributes of the span replaying a record.

    Metrics that are NULL or zero are left out. Records whose query failed
    get an ``error.msg``/``error.code`` pair.

    Args:
        record: The captured span record

    Returns:
        Ordered mapping of attribute key to value
    """
    attributes: dict[str, AttributeValue] = {}
    for key, field_name in METRIC_ATTRIBUTES:
        set_metric_if_value(attributes, key, getattr(record, field_name))

    if record.span_type:
        attributes["span.type"] = record.span_type

    if record.parameters:
        attributes["query.parameters"] = record.parameters
        for placeholder, value in parse_parameters(record.parameters).items():
            attributes[f"query.parameter.{placeholder}"] = value

    if record.has_error:
        attributes["error.msg"] = ERROR_MESSAGE
        attributes["error.code"] = record.sql_error_code

    # TODO: emit record.startup as a "first_tuple" span event
    return attributes
