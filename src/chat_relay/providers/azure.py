"""Azure OpenAI chat model factory."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import AzureChatOpenAI

from ..config import Settings
from ..deployments import Deployment
from ..errors import ConfigError

logger = logging.getLogger(__name__)

# ``model.params`` keys forwarded to the chat model; anything else is dropped.
SAMPLING_PARAMS = frozenset(
    {"temperature", "top_p", "max_tokens", "frequency_penalty", "presence_penalty", "stop", "seed"}
)

ChatModelFactory = Callable[[Settings, Deployment, Optional[Mapping[str, Any]]], BaseChatModel]


def sampling_kwargs(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Pick the recognised sampling parameters out of ``model.params``."""
    if not params:
        return {}
    kwargs = {key: value for key, value in params.items() if key in SAMPLING_PARAMS and value is not None}
    ignored = sorted(set(params) - SAMPLING_PARAMS)
    if ignored:
        logger.debug(f"Ignoring unsupported model params: {', '.join(ignored)}")
    return kwargs


def build_chat_model(
    settings: Settings,
    deployment: Deployment,
    params: Mapping[str, Any] | None = None,
) -> BaseChatModel:
    """Instantiate a streaming Azure OpenAI chat model bound to ``deployment``.

    Construction does not touch the network. Raises ``ConfigError`` when the
    resource name or API key is missing.
    """
    if not settings.azure_ai_resource_name or not settings.azure_ai_api_key:
        raise ConfigError("Missing Azure AI resource name or API key in environment variables")

    return AzureChatOpenAI(
        azure_endpoint=settings.azure_endpoint,
        azure_deployment=deployment.name,
        api_key=settings.azure_ai_api_key,
        api_version=settings.azure_ai_api_version,
        timeout=settings.provider_timeout_seconds,
        max_retries=0,
        streaming=True,
        **sampling_kwargs(params),
    )
