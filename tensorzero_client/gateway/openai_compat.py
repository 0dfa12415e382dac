"""OpenAI SDK pointed at the gateway's OpenAI-compatible endpoint.

TensorZero exposes ``{gateway}/openai/v1``; the model name selects a function
or a model, and TensorZero-specific fields ride in the request's extra body
under ``tensorzero::`` keys.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

logger = logging.getLogger(__name__)

_PREFIX = "tensorzero::"


def function_model_name(function_name: str, variant_name: str | None = None) -> str:
    """``tensorzero::function_name::<name>[::variant_name::<variant>]``."""
    name = f"{_PREFIX}function_name::{function_name}"
    if variant_name:
        name += f"::variant_name::{variant_name}"
    return name


def model_model_name(model_name: str) -> str:
    return f"{_PREFIX}model_name::{model_name}"


def tensorzero_extra_body(
    *,
    episode_id: UUID | None = None,
    tags: dict[str, str] | None = None,
    cache_options: dict[str, Any] | None = None,
    dryrun: bool | None = None,
    extra_headers: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Collect the set options into ``tensorzero::``-prefixed keys."""
    fields = {
        "episode_id": str(episode_id) if episode_id is not None else None,
        "tags": tags,
        "cache_options": cache_options,
        "dryrun": dryrun,
        "extra_headers": extra_headers,
    }
    return {f"{_PREFIX}{key}": value for key, value in fields.items() if value is not None}


class OpenAICompatClient:
    def __init__(
        self,
        gateway_url: str,
        api_key: str = "not-used",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        # Late import so the rest of the package works without openai installed
        from openai import AsyncOpenAI

        self.base_url = f"{gateway_url.rstrip('/')}/openai/v1"
        self._client = AsyncOpenAI(api_key=api_key, base_url=self.base_url, http_client=http_client)

    async def chat(
        self,
        function_name: str,
        messages: list[dict[str, Any]],
        *,
        variant_name: str | None = None,
        episode_id: UUID | None = None,
        tags: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Call a TensorZero function through ``chat.completions.create``.

        Returns the SDK's ``ChatCompletion``; extra keyword arguments go
        straight to the SDK.
        """
        extra_body = tensorzero_extra_body(episode_id=episode_id, tags=tags)
        extra_body.update(kwargs.pop("extra_body", None) or {})
        model = function_model_name(function_name, variant_name)
        logger.info("OpenAI-compatible call (model=%s)", model)
        return await self._client.chat.completions.create(
            model=model,
            messages=messages,
            extra_body=extra_body or None,
            **kwargs,
        )

    async def aclose(self) -> None:
        await self._client.close()
