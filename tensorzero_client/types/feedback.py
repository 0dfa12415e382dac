"""Feedback and dynamic-evaluation records."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from tensorzero_client.types.registry import WireModel


class FeedbackRequest(WireModel):
    """Metric feedback for one inference or one episode.

    ``value`` is whatever the metric expects: a float, a bool, a demonstration,
    or a comment string.
    """

    metric_name: str
    value: Any
    inference_id: UUID | None = None
    episode_id: UUID | None = None
    dryrun: bool | None = None
    internal: bool | None = None
    tags: dict[str, str] | None = None


class FeedbackResponse(WireModel):
    feedback_id: UUID


class DynamicEvaluationRunRequest(WireModel):
    variants: dict[str, str]
    tags: dict[str, str] | None = None
    project_name: str | None = None
    display_name: str | None = None


class DynamicEvaluationRunResponse(WireModel):
    run_id: UUID


class DynamicEvaluationRunEpisodeRequest(WireModel):
    run_id: UUID
    task_name: str | None = None
    datapoint_name: str | None = None
    tags: dict[str, str] | None = None


class DynamicEvaluationRunEpisodeResponse(WireModel):
    episode_id: UUID
