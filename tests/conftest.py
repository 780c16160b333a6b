"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from chat_relay.config import Settings


@pytest.fixture
def settings():
    """Fully configured settings with authentication enabled."""
    return Settings(
        _env_file=None,
        app_port=8080,
        azure_ai_resource_name="test-resource",
        azure_ai_api_key="test-key",
        identity_userinfo_url="https://identity.example.com/oauth/userinfo",
        auth_enabled=True,
        deployments=None,
    )


@pytest.fixture
def open_settings(settings):
    """Settings for the unauthenticated variant."""
    return settings.model_copy(update={"auth_enabled": False})


@pytest.fixture
def sample_payload():
    """A valid chat completion request body."""
    return {
        "messages": [
            {"role": "system", "parts": [{"type": "text", "text": "Be"}, {"type": "text", "text": "brief"}]},
            {"role": "user", "parts": [{"type": "text", "text": "Say hello"}]},
        ],
        "model": {"uri": "gpt-4o", "params": {}},
    }
