"""Health check route."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...config import Settings
from ...health import check_health
from ...providers import ChatModelFactory
from ..deps import get_app_settings, get_chat_model_factory

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    factory: ChatModelFactory = Depends(get_chat_model_factory),
):
    """Report per-check status; 200 when healthy, 503 otherwise."""
    try:
        status = await check_health(settings, factory)
    except Exception as e:
        logger.exception(f"Health check failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": str(e) or "Internal server error"},
        )

    return JSONResponse(
        status_code=200 if status.is_healthy else 503,
        content=status.model_dump(exclude_none=True),
    )
