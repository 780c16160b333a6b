"""Runtime configuration for the chat relay."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .deployments import DEFAULT_DEPLOYMENTS


class Settings(BaseSettings):
    """Runtime configuration for the chat relay."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    # FastAPI
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(..., alias="PORT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Azure OpenAI
    azure_ai_resource_name: str | None = Field(default=None, alias="AZURE_AI_RESOURCE_NAME")
    azure_ai_api_key: str | None = Field(default=None, alias="AZURE_AI_API_KEY")
    azure_ai_api_version: str = Field(default="2024-10-21", alias="AZURE_AI_API_VERSION")

    # Comma-separated deployment allow-list; empty means DEFAULT_DEPLOYMENTS.
    deployments: str | None = Field(default=None, alias="DEPLOYMENTS")

    system_prompt: str = Field(default="You are a helpful assistant", alias="SYSTEM_PROMPT")

    # Identity service (OAuth userinfo endpoint)
    identity_userinfo_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("IDENTITY_USERINFO_URL", "CLERK_OAUTH_USER_INFO_URL"),
    )
    auth_enabled: bool = Field(default=True, alias="AUTH_ENABLED")

    completions_path: str = Field(default="/v1/chat/completions", alias="COMPLETIONS_PATH")

    # Timeouts (seconds)
    auth_timeout_seconds: float = Field(default=10.0, alias="AUTH_TIMEOUT_SECONDS", gt=0)
    health_probe_timeout_seconds: float = Field(default=5.0, alias="HEALTH_PROBE_TIMEOUT_SECONDS", gt=0)
    provider_timeout_seconds: float = Field(default=60.0, alias="PROVIDER_TIMEOUT_SECONDS", gt=0)
    stream_idle_timeout_seconds: float = Field(default=120.0, alias="STREAM_IDLE_TIMEOUT_SECONDS", gt=0)

    @property
    def allowed_deployments(self) -> frozenset[str]:
        if self.deployments and self.deployments.strip():
            names = [name.strip() for name in self.deployments.split(",") if name.strip()]
            if names:
                return frozenset(names)
        return frozenset(DEFAULT_DEPLOYMENTS)

    @property
    def azure_endpoint(self) -> str | None:
        if not self.azure_ai_resource_name:
            return None
        return f"https://{self.azure_ai_resource_name}.openai.azure.com"


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings so every request shares a single instance."""

    return Settings()  # type: ignore[call-arg]
