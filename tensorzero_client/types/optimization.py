"""Optimization (fine-tuning) job configs and handles. Plain data only."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Mapping, Union

from tensorzero_client.types.registry import VariantRegistry, WireModel

OPTIMIZATION_CONFIGS: VariantRegistry = VariantRegistry("optimization config")
JOB_HANDLES: VariantRegistry = VariantRegistry("optimization job handle")


@OPTIMIZATION_CONFIGS.register
class OpenAISFTConfig(WireModel):
    type: Literal["openai_sft"] = "openai_sft"
    model: str
    batch_size: int | None = None
    learning_rate_multiplier: float | None = None
    n_epochs: int | None = None
    credentials: str | None = None
    api_base: str | None = None
    seed: int | None = None
    suffix: str | None = None


@OPTIMIZATION_CONFIGS.register
class FireworksSFTConfig(WireModel):
    type: Literal["fireworks_sft"] = "fireworks_sft"
    model: str
    account_id: str
    credentials: str | None = None
    api_base: str | None = None


@OPTIMIZATION_CONFIGS.register
class GCPVertexGeminiSFTConfig(WireModel):
    type: Literal["gcp_vertex_gemini_sft"] = "gcp_vertex_gemini_sft"
    model: str
    bucket_name: str
    project_id: str
    region: str
    learning_rate_multiplier: float | None = None
    adapter_size: int | None = None
    n_epochs: int | None = None
    export_last_checkpoint_only: bool | None = None
    credentials: str | None = None
    api_base: str | None = None
    seed: int | None = None
    service_account: str | None = None
    kms_key_name: str | None = None
    tuned_model_display_name: str | None = None
    bucket_path_prefix: str | None = None


OptimizationConfig = Union[OpenAISFTConfig, FireworksSFTConfig, GCPVertexGeminiSFTConfig]


# ---------------------------------------------------------------------------
# Job handles
# ---------------------------------------------------------------------------

@JOB_HANDLES.register
class OpenAISFTJobHandle(WireModel):
    type: Literal["openai_sft"] = "openai_sft"
    job_id: str
    job_url: str | None = None


@JOB_HANDLES.register
class FireworksSFTJobHandle(WireModel):
    type: Literal["fireworks_sft"] = "fireworks_sft"
    job_id: str
    job_url: str | None = None


@JOB_HANDLES.register
class GCPVertexGeminiSFTJobHandle(WireModel):
    type: Literal["gcp_vertex_gemini_sft"] = "gcp_vertex_gemini_sft"
    job_id: str
    job_url: str | None = None


OptimizationJobHandle = Union[OpenAISFTJobHandle, FireworksSFTJobHandle, GCPVertexGeminiSFTJobHandle]


class OptimizationJobStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class OptimizationJobInfo(WireModel):
    message: str
    status: OptimizationJobStatus
    output: Any = None
    estimated_finish: int | None = None


def decode_optimization_config(payload: Mapping[str, Any]) -> OptimizationConfig:
    return OPTIMIZATION_CONFIGS.decode(payload)


def decode_job_handle(payload: Mapping[str, Any]) -> OptimizationJobHandle:
    return JOB_HANDLES.decode(payload)
