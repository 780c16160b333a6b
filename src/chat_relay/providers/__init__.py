"""Model provider module."""

from .azure import (
    SAMPLING_PARAMS,
    ChatModelFactory,
    build_chat_model,
    sampling_kwargs,
)

__all__ = [
    "SAMPLING_PARAMS",
    "ChatModelFactory",
    "build_chat_model",
    "sampling_kwargs",
]
