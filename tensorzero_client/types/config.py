"""Function and variant configuration, as produced by the gateway's config."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BeforeValidator, ConfigDict, Field

from tensorzero_client.types.registry import VariantRegistry, WireModel

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

VARIANT_CONFIGS: VariantRegistry = VariantRegistry("variant config")


@VARIANT_CONFIGS.register
class ChatCompletionConfig(WireModel):
    type: Literal["chat_completion"] = "chat_completion"
    model: str
    system_template: str | None = None
    user_template: str | None = None
    assistant_template: str | None = None


class _OpaqueVariant(WireModel):
    """Only the discriminator is modelled; other keys are kept as extras."""

    model_config = ConfigDict(frozen=True, protected_namespaces=(), extra="allow")


@VARIANT_CONFIGS.register
class BestOfNSamplingConfig(_OpaqueVariant):
    type: Literal["best_of_n_sampling"] = "best_of_n_sampling"


@VARIANT_CONFIGS.register
class DiclConfig(_OpaqueVariant):
    type: Literal["dicl"] = "dicl"


@VARIANT_CONFIGS.register
class MixtureOfNConfig(_OpaqueVariant):
    type: Literal["mixture_of_n"] = "mixture_of_n"


@VARIANT_CONFIGS.register
class ChainOfThoughtConfig(_OpaqueVariant):
    type: Literal["chain_of_thought"] = "chain_of_thought"


VariantConfig = Union[
    ChatCompletionConfig,
    BestOfNSamplingConfig,
    DiclConfig,
    MixtureOfNConfig,
    ChainOfThoughtConfig,
]


def _decode_variants(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {name: VARIANT_CONFIGS.decode(raw) for name, raw in value.items()}
    return value


VariantsConfig = Annotated[dict[str, VariantConfig], BeforeValidator(_decode_variants)]


def decode_variant_config(payload: Mapping[str, Any]) -> VariantConfig:
    return VARIANT_CONFIGS.decode(payload)


def encode_variant_config(variant: VariantConfig) -> dict[str, Any]:
    return VARIANT_CONFIGS.encode(variant)


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------

FUNCTION_CONFIGS: VariantRegistry = VariantRegistry("function config")


@FUNCTION_CONFIGS.register
class ChatFunctionConfig(WireModel):
    type: Literal["chat"] = "chat"
    variants: VariantsConfig = Field(default_factory=dict)
    system_schema: dict[str, Any] | None = None
    user_schema: dict[str, Any] | None = None
    assistant_schema: dict[str, Any] | None = None


@FUNCTION_CONFIGS.register
class JsonFunctionConfig(WireModel):
    type: Literal["json"] = "json"
    variants: VariantsConfig = Field(default_factory=dict)
    system_schema: dict[str, Any] | None = None
    user_schema: dict[str, Any] | None = None
    assistant_schema: dict[str, Any] | None = None
    output_schema: dict[str, Any] | None = None


FunctionConfig = Union[ChatFunctionConfig, JsonFunctionConfig]


def decode_function_config(payload: Mapping[str, Any]) -> FunctionConfig:
    return FUNCTION_CONFIGS.decode(payload)


def encode_function_config(function: FunctionConfig) -> dict[str, Any]:
    return FUNCTION_CONFIGS.encode(function)


def _decode_functions(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {name: FUNCTION_CONFIGS.decode(raw) for name, raw in value.items()}
    return value


class Config(WireModel):
    """The ``functions`` section of a gateway configuration.

    Other top-level sections (models, metrics, ...) are ignored. No schema
    validation happens here.
    """

    functions: Annotated[dict[str, FunctionConfig], BeforeValidator(_decode_functions)] = Field(
        default_factory=dict
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        return cls.model_validate(data)

    def get_function(self, name: str) -> FunctionConfig:
        try:
            return self.functions[name]
        except KeyError:
            raise KeyError(f"Function '{name}' not found in config") from None


def load_config(path: str | Path) -> Config:
    """Read a ``.toml`` or ``.json`` gateway config from disk."""
    path = Path(path)
    raw = path.read_bytes()
    if path.suffix == ".json":
        data = json.loads(raw)
    else:
        data = tomllib.loads(raw.decode("utf-8"))
    config = Config.from_mapping(data)
    logger.info("Loaded config %s (%d functions)", path, len(config.functions))
    return config
