"""Boolean filter tree for querying stored inferences.

The tree is evaluated by the gateway, never locally. Nodes are built
bottom-up with the helper functions at the end of this module, so a tree is
always finite and every ``not`` has exactly one child.

Example::

    from tensorzero_client.types import filters as f

    node = f.and_(
        f.float_metric("jaccard", 0.5, ">="),
        f.not_(f.tag("env", "staging")),
    )
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BeforeValidator, Field, field_validator

from tensorzero_client.types.registry import VariantRegistry, WireModel

ComparisonOperator = Literal["<", "<=", "=", ">", ">=", "!="]
EqualityOperator = Literal["=", "!="]

FILTERS: VariantRegistry = VariantRegistry("filter node")


def _decode_child(value: Any) -> Any:
    return FILTERS.decode(value) if isinstance(value, Mapping) else value


def _decode_children(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_decode_child(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

@FILTERS.register
class FloatMetricFilter(WireModel):
    type: Literal["float_metric"] = "float_metric"
    metric_name: str
    value: float
    comparison_operator: ComparisonOperator


@FILTERS.register
class BooleanMetricFilter(WireModel):
    """Equality only; there is no operator on the wire."""
    type: Literal["boolean_metric"] = "boolean_metric"
    metric_name: str
    value: bool


@FILTERS.register
class TagFilter(WireModel):
    type: Literal["tag"] = "tag"
    key: str
    value: str
    comparison_operator: EqualityOperator


@FILTERS.register
class TimeFilter(WireModel):
    type: Literal["time"] = "time"
    time: datetime
    comparison_operator: ComparisonOperator

    @field_validator("time")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # naive times are taken as UTC so the wire form always carries an offset
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# ---------------------------------------------------------------------------
# Branches
# ---------------------------------------------------------------------------

@FILTERS.register
class AndFilter(WireModel):
    type: Literal["and"] = "and"
    children: Annotated[list[FilterNode], BeforeValidator(_decode_children)] = Field(
        default_factory=list
    )


@FILTERS.register
class OrFilter(WireModel):
    type: Literal["or"] = "or"
    children: Annotated[list[FilterNode], BeforeValidator(_decode_children)] = Field(
        default_factory=list
    )


@FILTERS.register
class NotFilter(WireModel):
    type: Literal["not"] = "not"
    child: Annotated[FilterNode, BeforeValidator(_decode_child)]


FilterNode = Union[
    FloatMetricFilter,
    BooleanMetricFilter,
    TagFilter,
    TimeFilter,
    AndFilter,
    OrFilter,
    NotFilter,
]

AndFilter.model_rebuild()
OrFilter.model_rebuild()
NotFilter.model_rebuild()


def decode_filter(payload: Mapping[str, Any]) -> FilterNode:
    return FILTERS.decode(payload)


def encode_filter(node: FilterNode) -> dict[str, Any]:
    return FILTERS.encode(node)


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------

def float_metric(
    metric_name: str, value: float, comparison_operator: ComparisonOperator
) -> FloatMetricFilter:
    return FloatMetricFilter(
        metric_name=metric_name, value=value, comparison_operator=comparison_operator
    )


def boolean_metric(metric_name: str, value: bool) -> BooleanMetricFilter:
    return BooleanMetricFilter(metric_name=metric_name, value=value)


def tag(key: str, value: str, comparison_operator: EqualityOperator = "=") -> TagFilter:
    return TagFilter(key=key, value=value, comparison_operator=comparison_operator)


def time_filter(time: datetime | str, comparison_operator: ComparisonOperator) -> TimeFilter:
    """``time`` may be a datetime or an RFC 3339 string; naive values are read as UTC."""
    return TimeFilter(time=time, comparison_operator=comparison_operator)


def and_(*children: FilterNode) -> AndFilter:
    # zero children is allowed; its meaning is up to the gateway
    return AndFilter(children=list(children))


def or_(*children: FilterNode) -> OrFilter:
    return OrFilter(children=list(children))


def not_(child: FilterNode) -> NotFilter:
    return NotFilter(child=child)
