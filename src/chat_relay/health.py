"""Health reporting for the relay and its dependencies."""

from __future__ import annotations

import logging
from typing import Literal

import httpx
from pydantic import BaseModel

from .config import Settings
from .deployments import DEFAULT_DEPLOYMENTS, Deployment
from .providers import ChatModelFactory

logger = logging.getLogger(__name__)

# Only these checks decide the overall status; the identity probe is informational.
CRITICAL_CHECKS = ("environment", "azureConnection")


class CheckResult(BaseModel):
    status: Literal["ok", "error"]
    message: str | None = None


class HealthStatus(BaseModel):
    status: Literal["healthy", "unhealthy"]
    checks: dict[str, CheckResult]
    message: str | None = None

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"


def _required_settings(settings: Settings) -> list[tuple[str, object]]:
    required: list[tuple[str, object]] = [("PORT", settings.app_port)]
    if settings.auth_enabled:
        required.append(("IDENTITY_USERINFO_URL", settings.identity_userinfo_url))
    required.append(("AZURE_AI_RESOURCE_NAME", settings.azure_ai_resource_name))
    required.append(("AZURE_AI_API_KEY", settings.azure_ai_api_key))
    return required


def check_environment(settings: Settings) -> CheckResult:
    for name, value in _required_settings(settings):
        if value is None or value == "":
            return CheckResult(status="error", message=f"Missing required environment variable: {name}")
    return CheckResult(status="ok")


def check_provider(settings: Settings, factory: ChatModelFactory) -> CheckResult:
    """Construct a chat model without calling it."""
    allowed = sorted(settings.allowed_deployments)
    probe = Deployment(name=allowed[0] if allowed else DEFAULT_DEPLOYMENTS[0])
    try:
        factory(settings, probe, None)
    except Exception as exc:
        logger.warning(f"Azure AI client construction failed: {exc}")
        return CheckResult(status="error", message=str(exc) or "Failed to initialize Azure AI")
    return CheckResult(status="ok")


async def check_identity_service(settings: Settings) -> CheckResult:
    if not settings.identity_userinfo_url:
        return CheckResult(status="error", message="Identity service URL is not configured")
    try:
        async with httpx.AsyncClient() as client:
            response = await client.head(
                settings.identity_userinfo_url,
                timeout=settings.health_probe_timeout_seconds,
            )
    except httpx.HTTPError as exc:
        logger.warning(f"Identity service probe failed: {exc}")
        return CheckResult(status="error", message="Failed to connect to identity service")

    if response.is_success:
        return CheckResult(status="ok")
    return CheckResult(status="error", message=f"Identity service returned status {response.status_code}")


async def check_health(settings: Settings, factory: ChatModelFactory) -> HealthStatus:
    """Run every check and aggregate; nothing is cached between calls."""
    checks: dict[str, CheckResult] = {
        "environment": check_environment(settings),
        "azureConnection": check_provider(settings, factory),
    }
    if settings.auth_enabled:
        checks["identityService"] = await check_identity_service(settings)

    healthy = all(checks[name].status == "ok" for name in CRITICAL_CHECKS)
    return HealthStatus(
        status="healthy" if healthy else "unhealthy",
        checks=checks,
        message=None if healthy else "One or more critical checks failed",
    )
