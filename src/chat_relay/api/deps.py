"""Request-scoped dependencies resolved from application state."""

from __future__ import annotations

from fastapi import Request

from ..config import Settings
from ..providers import ChatModelFactory


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_chat_model_factory(request: Request) -> ChatModelFactory:
    return request.app.state.chat_model_factory
