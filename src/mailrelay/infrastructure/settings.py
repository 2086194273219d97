"""Application settings using Pydantic Settings for configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Mail Relay"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Relay
    forward_list: str = ""
    block_policy: str = "telegram"
    guardian_mode: bool = False
    block_list: str = ""
    white_list: str = ""

    # Telegram
    telegram_token: SecretStr | None = None
    telegram_to_chat_id: str = ""
    telegram_api_base: str = "https://api.telegram.org"
    domain: str | None = None

    # Mail parsing
    max_email_size: int = Field(default=512 * 1024, ge=0)
    max_email_size_policy: str = "truncate"
    mail_ttl: int = Field(default=60 * 60 * 24, gt=0)
    mail_parser_plugin: str | None = None

    # Redis (status + mail preview cache); in-memory stores when unset
    redis_url: str | None = None

    @computed_field
    @property
    def telegram_chat_ids(self) -> list[str]:
        """Split the comma-separated chat id list."""
        return [x.strip() for x in self.telegram_to_chat_id.split(",") if x.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
