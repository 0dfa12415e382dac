"""Tests for the inference filter tree."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tensorzero_client.types import filters as f
from tensorzero_client.types.errors import MalformedContentError, UnknownVariantError
from tensorzero_client.types.filters import (
    AndFilter,
    FloatMetricFilter,
    NotFilter,
    OrFilter,
    TagFilter,
    decode_filter,
    encode_filter,
)


class TestConstruction:
    def test_leaf_wire_forms(self):
        assert encode_filter(f.float_metric("jaccard", 0.5, ">=")) == {
            "type": "float_metric",
            "metric_name": "jaccard",
            "value": 0.5,
            "comparison_operator": ">=",
        }
        assert encode_filter(f.boolean_metric("exact_match", True)) == {
            "type": "boolean_metric",
            "metric_name": "exact_match",
            "value": True,
        }
        assert encode_filter(f.tag("env", "prod")) == {
            "type": "tag",
            "key": "env",
            "value": "prod",
            "comparison_operator": "=",
        }

    def test_time_filter_accepts_rfc3339(self):
        node = f.time_filter("2025-01-02T03:04:05Z", "<")
        assert node.time == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert encode_filter(node)["time"].startswith("2025-01-02T03:04:05")

    def test_naive_time_is_read_as_utc(self):
        node = f.time_filter(datetime(2025, 1, 2, 3, 4, 5), ">=")
        assert node.time.tzinfo is timezone.utc
        assert encode_filter(node)["time"] == "2025-01-02T03:04:05Z"

    def test_tag_rejects_ordering_operator(self):
        with pytest.raises(ValueError):
            f.tag("env", "prod", ">")

    def test_not_requires_child(self):
        with pytest.raises(ValueError):
            NotFilter()

    def test_nested_tree(self):
        tree = f.and_(
            f.float_metric("m", 1.0, ">"),
            f.or_(f.tag("a", "1"), f.not_(f.boolean_metric("b", False))),
        )
        encoded = encode_filter(tree)
        assert encoded["type"] == "and"
        assert [c["type"] for c in encoded["children"]] == ["float_metric", "or"]
        inner = encoded["children"][1]["children"][1]
        assert inner == {"type": "not", "child": {"type": "boolean_metric", "metric_name": "b", "value": False}}

    def test_empty_branches_are_allowed(self):
        assert encode_filter(f.and_()) == {"type": "and", "children": []}
        assert encode_filter(f.or_()) == {"type": "or", "children": []}


class TestDecode:
    def test_nested(self):
        node = decode_filter({
            "type": "or",
            "children": [
                {"type": "tag", "key": "k", "value": "v", "comparison_operator": "!="},
                {"type": "not", "child": {"type": "float_metric", "metric_name": "m",
                                          "value": 2, "comparison_operator": "<="}},
            ],
        })
        assert isinstance(node, OrFilter)
        assert isinstance(node.children[0], TagFilter)
        assert isinstance(node.children[1], NotFilter)
        assert isinstance(node.children[1].child, FloatMetricFilter)
        assert node.children[1].child.value == 2.0

    def test_round_trip(self):
        tree = f.and_(f.tag("x", "y"), f.not_(f.or_()))
        assert decode_filter(encode_filter(tree)) == tree

    def test_unknown_type_deep_in_tree(self):
        with pytest.raises(UnknownVariantError) as exc_info:
            decode_filter({"type": "and", "children": [{"type": "not", "child": {"type": "regex"}}]})
        assert exc_info.value.discriminator == "regex"

    def test_malformed_leaf(self):
        with pytest.raises(MalformedContentError):
            decode_filter({"type": "tag", "key": "k"})

    def test_not_without_child(self):
        with pytest.raises(MalformedContentError):
            decode_filter({"type": "not"})

    def test_and_default_children(self):
        assert decode_filter({"type": "and"}) == AndFilter()
