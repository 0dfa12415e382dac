"""Tests for shared records and the error taxonomy."""

from __future__ import annotations

import pytest

from tensorzero_client.types.errors import (
    MalformedContentError,
    TensorZeroClientError,
    TensorZeroError,
    UnknownVariantError,
)
from tensorzero_client.types.shared import FinishReason, OrderBy, Usage


class TestFinishReason:
    @pytest.mark.parametrize("value", ["stop", "length", "tool_call", "content_filter", "unknown"])
    def test_known_values(self, value):
        assert FinishReason(value).value == value

    def test_unrecognised_value_maps_to_unknown(self):
        assert FinishReason("max_tokens") is FinishReason.UNKNOWN


class TestOrderBy:
    def test_by_timestamp(self):
        assert OrderBy.by_timestamp("ASC").to_wire() == {"by": "timestamp", "direction": "ASC"}

    def test_by_metric(self):
        assert OrderBy.by_metric("jaccard").to_wire() == {
            "by": "metric",
            "name": "jaccard",
            "direction": "DESC",
        }

    def test_metric_needs_name(self):
        with pytest.raises(ValueError):
            OrderBy(by="metric")

    def test_timestamp_takes_no_name(self):
        with pytest.raises(ValueError):
            OrderBy(by="timestamp", name="x")

    def test_bad_direction(self):
        with pytest.raises(ValueError):
            OrderBy(by="timestamp", direction="UP")


def test_usage_defaults():
    assert Usage() == Usage(input_tokens=0, output_tokens=0)


class TestErrors:
    def test_tensorzero_error_message(self):
        err = TensorZeroError(400, "bad request")
        assert str(err) == "TensorZeroError (status code 400): bad request"
        assert err.status_code == 400
        assert err.text == "bad request"

    @pytest.mark.parametrize("status, retryable", [(400, False), (404, False), (429, True), (500, True), (503, True)])
    def test_retryable(self, status, retryable):
        assert TensorZeroError(status, "").is_retryable is retryable

    def test_common_base_and_not_value_error(self):
        for err in (UnknownVariantError("f", "x"), MalformedContentError("f", "x", "why")):
            assert isinstance(err, TensorZeroClientError)
            assert not isinstance(err, ValueError)
