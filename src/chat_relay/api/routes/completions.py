"""Chat completion streaming route."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from ...auth import require_authentication
from ...config import Settings
from ...deployments import resolve_deployment
from ...errors import PayloadValidationError, ProviderError
from ...messages import build_conversation
from ...providers import ChatModelFactory
from ...relay import STREAM_HEADERS, STREAM_MEDIA_TYPE, CompletionRelay
from ...schemas import parse_payload
from ..deps import get_app_settings, get_chat_model_factory

logger = logging.getLogger(__name__)


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise PayloadValidationError(
            "Invalid request body",
            details=[{"path": "body", "message": f"Malformed JSON: {exc}", "type": "json_invalid"}],
        ) from exc


async def chat_completions(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    factory: ChatModelFactory = Depends(get_chat_model_factory),
):
    """Validate the payload and stream the deployment's output as plain text."""
    if settings.auth_enabled:
        await require_authentication(request.headers.get("authorization"), settings)

    payload = parse_payload(await _read_json(request))
    deployment = resolve_deployment(payload.model.uri, settings.allowed_deployments)
    conversation = build_conversation(settings.system_prompt, payload.messages)

    try:
        model = factory(settings, deployment, payload.model.params)
    except Exception as exc:
        logger.exception(f"Failed to construct chat model for {deployment}")
        raise ProviderError("Failed to process request", details=str(exc)) from exc

    relay = CompletionRelay(model, conversation, idle_timeout=settings.stream_idle_timeout_seconds)
    await relay.start()

    logger.info(f"Streaming completion from {deployment} ({len(payload.messages)} messages)")
    return StreamingResponse(
        relay.body(),
        media_type=STREAM_MEDIA_TYPE,
        headers=STREAM_HEADERS,
        background=BackgroundTask(relay.aclose),
    )


def build_router(path: str) -> APIRouter:
    """Router serving completions at the configured path."""
    router = APIRouter(tags=["completions"])
    router.add_api_route(path, chat_completions, methods=["POST"])
    return router
