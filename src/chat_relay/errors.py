"""Error types surfaced by the chat relay.

Every error except ``StreamError`` is rendered as a JSON body of the form
``{"error": ..., "details": ...}`` by the exception handler installed in
``chat_relay.api.app``. ``StreamError`` only happens after the response
status and headers have been sent, so it can only end the body.
"""

from __future__ import annotations

from typing import Any


class ChatRelayError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, details: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class PayloadValidationError(ChatRelayError):
    """Request body is not valid JSON or does not match the payload schema."""

    status_code = 400


class UnknownDeploymentError(ChatRelayError):
    """``model.uri`` is not in the deployment allow-list."""

    status_code = 400


class AuthError(ChatRelayError):
    """Missing, invalid or unverifiable bearer token."""

    status_code = 401


class ProviderError(ChatRelayError):
    """Failure constructing or invoking the model provider."""

    status_code = 500


class ConfigError(ChatRelayError):
    """Required configuration is missing."""

    status_code = 500


class StreamError(ChatRelayError):
    """Failure while relaying provider output after headers were committed."""

    status_code = 500
