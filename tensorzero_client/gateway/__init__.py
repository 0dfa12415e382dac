from tensorzero_client.gateway.interface import Gateway, race_cancel
from tensorzero_client.gateway.http import DEFAULT_BASE_URL, HTTPGateway
from tensorzero_client.gateway.mock import MockGateway
from tensorzero_client.gateway.openai_compat import (
    OpenAICompatClient,
    function_model_name,
    model_model_name,
    tensorzero_extra_body,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "Gateway",
    "HTTPGateway",
    "MockGateway",
    "OpenAICompatClient",
    "function_model_name",
    "model_model_name",
    "race_cancel",
    "tensorzero_extra_body",
]
