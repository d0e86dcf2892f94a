"""Client configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHATREST_",
        case_sensitive=False,
    )

    # REST API
    api_base_url: str = Field(
        default="https://discord.com/api",
        description="Base URL of the chat platform REST API",
    )
    api_version: int = Field(default=10, ge=1, description="REST API version")
    token: str = Field(default="", description="Bot token used for authorization")
    user_agent: str = Field(
        default="DiscordBot (https://github.com/chatrest/chatrest, 0.1.0)",
        description="User-Agent header sent with every request",
    )

    # Dispatching
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout per HTTP attempt, in seconds",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        description="Retries on 429 and 5xx responses before giving up",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def api_url(self) -> str:
        """Versioned API root, e.g. https://discord.com/api/v10."""
        return f"{self.api_base_url.rstrip('/')}/v{self.api_version}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
