"""Tests for span attribute construction."""

from decimal import Decimal

import pytest

from spanreplay.tracing.otel.attributes import (
    METRIC_ATTRIBUTES,
    build_span_attributes,
)


class TestSparsity:
    """Metrics that are NULL or zero are omitted."""

    def test_zero_metric_omitted(self, record_factory):
        """wal_records = 0 gives no wal.records attribute."""
        attributes = build_span_attributes(record_factory(wal_records=0))
        assert "wal.records" not in attributes

    def test_non_zero_metric_included(self, record_factory):
        """wal_records = 5 gives wal.records = 5."""
        attributes = build_span_attributes(record_factory(wal_records=5))
        assert attributes["wal.records"] == 5

    def test_null_metric_omitted(self, record_factory):
        """An absent metric gives no attribute."""
        attributes = build_span_attributes(record_factory(rows=None))
        assert "rows" not in attributes

    @pytest.mark.parametrize("key,field_name", METRIC_ATTRIBUTES)
    def test_every_metric_follows_the_sparsity_rule(
        self, record_factory, key, field_name
    ):
        """Each metric is absent at zero and present otherwise."""
        assert key not in build_span_attributes(
            record_factory(**{field_name: 0})
        )
        assert key not in build_span_attributes(
            record_factory(**{field_name: None})
        )
        assert (
            build_span_attributes(record_factory(**{field_name: 3}))[key] == 3
        )

    def test_float_metrics_keep_their_value(self, record_factory):
        """Planner estimates and timings are floats."""
        attributes = build_span_attributes(
            record_factory(plan_total_cost=12.5, blk_read_time=0.25)
        )
        assert attributes["plan.total_cost"] == 12.5
        assert attributes["block.read_time"] == 0.25

    def test_only_span_type_for_bare_record(self, record_factory):
        """A record without metrics only carries its span type."""
        assert build_span_attributes(record_factory()) == {
            "span.type": "Planner"
        }


class TestErrorAttributes:
    """Failed queries are flagged, not filtered."""

    def test_error_code_adds_error_pair(self, record_factory):
        """A non-success SQLSTATE adds error.msg and error.code."""
        attributes = build_span_attributes(
            record_factory(sql_error_code="42P01")
        )
        assert attributes["error.msg"] == "Query error"
        assert attributes["error.code"] == "42P01"

    @pytest.mark.parametrize("code", ["00000", None])
    def test_success_code_has_no_error(self, record_factory, code):
        """Successful or unknown codes add no error attributes."""
        attributes = build_span_attributes(record_factory(sql_error_code=code))
        assert "error.msg" not in attributes
        assert "error.code" not in attributes


class TestParameterAttributes:
    """Captured query parameters."""

    def test_parameters_parsed(self, record_factory):
        """Each $N placeholder becomes its own attribute."""
        attributes = build_span_attributes(
            record_factory(parameters="$1 = '1', $2 = 'abc'")
        )
        assert attributes["query.parameters"] == "$1 = '1', $2 = 'abc'"
        assert attributes["query.parameter.$1"] == "1"
        assert attributes["query.parameter.$2"] == "abc"

    def test_empty_parameters_omitted(self, record_factory):
        attributes = build_span_attributes(record_factory(parameters=""))
        assert "query.parameters" not in attributes


class TestDecodedMetrics:
    """Metrics decoded from numeric columns."""

    def test_decimal_wal_bytes_becomes_int(self, record_factory):
        """numeric columns are decoded to valid attribute types."""
        from spanreplay.models import SpanRecord

        row = {
            "trace_id": 1,
            "parent_id": 0,
            "span_id": 10,
            "span_type": "Executor",
            "span_operation": "ExecutorRun",
            "span_start": record_factory().span_start,
            "span_start_ns": 0,
            "duration": 5,
            "wal_bytes": Decimal("4096"),
        }
        attributes = build_span_attributes(SpanRecord.from_row(row))
        assert attributes["wal.bytes"] == 4096
        assert isinstance(attributes["wal.bytes"], int)
