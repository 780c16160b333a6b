"""Bearer token verification against the identity service userinfo endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .config import Settings
from .errors import AuthError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthResult:
    success: bool
    error: str | None = None
    subject: str | None = None


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token from ``Bearer <token>``, or None when absent or malformed."""
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):] or None


async def verify_authentication(authorization: str | None, settings: Settings) -> AuthResult:
    """
    Verify the caller's bearer token with the identity service.

    Args:
        authorization: Raw ``Authorization`` header value
        settings: Runtime settings holding the userinfo URL and timeout

    Returns:
        AuthResult; never raises
    """
    token = extract_bearer_token(authorization)
    if not token:
        return AuthResult(success=False, error="Missing or invalid Authorization header")

    url = settings.identity_userinfo_url
    if not url:
        logger.error("IDENTITY_USERINFO_URL is not configured")
        return AuthResult(success=False, error="Server configuration error")

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
                timeout=settings.auth_timeout_seconds,
            )

            if not response.is_success:
                if response.status_code == 401:
                    return AuthResult(success=False, error="Invalid or expired access token")
                logger.error(
                    f"Identity userinfo request failed: {response.status_code} {response.reason_phrase}"
                )
                return AuthResult(success=False, error="Authentication service unavailable")

            user_info = response.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("Authentication verification error")
        return AuthResult(success=False, error="Internal server error during authentication")

    subject = user_info.get("sub") if isinstance(user_info, dict) else None
    logger.info(f"User authenticated: {subject}")
    return AuthResult(success=True, subject=subject)


async def require_authentication(authorization: str | None, settings: Settings) -> AuthResult:
    """Raise ``AuthError`` unless the token verifies."""
    result = await verify_authentication(authorization, settings)
    outcome = "Success" if result.success else "Failed"
    reason = f" - {result.error}" if result.error else ""
    logger.info(f"Authentication result: {outcome}{reason}")
    if not result.success:
        raise AuthError("Unauthorized", details=result.error)
    return result
