"""
Docmost Configuration Module.

Handles application settings, the registration secret and the MCP gateway
configuration. Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class McpSettings(BaseSettings):
    """Machine Control Protocol gateway configuration."""

    model_config = SettingsConfigDict(env_prefix="MCP_")

    name_for_model: str = Field(default="Docmost MCP", description="Tool manifest name shown to models")
    name_for_human: str = Field(
        default="Docmost Machine Control Protocol",
        description="Tool manifest name shown to humans",
    )
    description_for_model: str = Field(
        default=(
            "Read and manage Docmost spaces, pages, comments, projects and tasks. "
            "Every call is a JSON-RPC 2.0 request posted to /api/mcp."
        ),
    )
    openapi_title: str = Field(default="Docmost Machine Control Protocol API")
    openapi_version: str = Field(default="1.0.0")
    max_batch_size: int = Field(default=100, ge=1, description="Maximum requests accepted in one batch")
    batch_concurrency: int = Field(default=10, ge=1, description="Batch elements dispatched at once")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # Bootstrap
    app_secret: str = Field(
        default="",
        description="Shared secret expected in x-registration-token. Empty disables API key registration.",
        validation_alias="APP_SECRET",
    )
    default_workspace_id: str | None = Field(
        default=None,
        description="Workspace used when a request carries no X-Workspace-Id header (self-hosted mode).",
        validation_alias="DEFAULT_WORKSPACE_ID",
    )

    # Nested settings
    mcp: McpSettings = Field(default_factory=McpSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"

    @property
    def registration_enabled(self) -> bool:
        return bool(self.app_secret)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
