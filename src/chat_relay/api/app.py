"""FastAPI application setup."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Settings, get_settings
from ..errors import ChatRelayError
from ..providers import ChatModelFactory, build_chat_model
from .routes import completions, health

logger = logging.getLogger(__name__)


async def _relay_error_handler(request: Request, exc: ChatRelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    # 404 for unknown paths, 405 for a known path with the wrong method.
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(
    settings: Settings | None = None,
    chat_model_factory: ChatModelFactory = build_chat_model,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    resolved = settings or get_settings()

    app = FastAPI(
        title="Chat Relay",
        description="Streaming proxy for Azure OpenAI chat completions",
        version="0.1.0",
        debug=resolved.debug,
    )
    app.state.settings = resolved
    app.state.chat_model_factory = chat_model_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ChatRelayError, _relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(health.router)
    app.include_router(completions.build_router(resolved.completions_path))

    auth_mode = "enabled" if resolved.auth_enabled else "disabled"
    logger.info(f"Completions served at {resolved.completions_path} (auth {auth_mode})")
    return app
