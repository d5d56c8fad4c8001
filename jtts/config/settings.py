"""Application settings using pydantic-settings."""

import json
from enum import Enum
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class ProviderConfigurationError(Exception):
    """Raised when the speech provider cannot be configured from settings."""


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_", env_file=".env", extra="ignore", populate_by_name=True
    )

    name: str = Field(default="jtts", alias="APP_NAME")
    version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: Environment = Field(default=Environment.DEV, alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")


class ServerSettings(BaseSettings):
    """Server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    cors_origins: str = Field(default="*")

    @property
    def cors_origin_list(self) -> list[str]:
        """Get parsed CORS origins as list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class ProviderSettings(BaseSettings):
    """Upstream speech provider settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER_", env_file=".env", extra="ignore", populate_by_name=True
    )

    credentials: str = Field(default="", alias="GOOGLE_CREDENTIALS")
    language_code: str = Field(default="ja-JP")
    effects_profile: str = Field(default="telephony-class-application")
    timeout_seconds: float = Field(default=30.0, gt=0)
    use_mock: bool = Field(default=False)

    def credentials_info(self) -> dict[str, Any]:
        """
        Parse the service-account credential JSON.

        Raises:
            ProviderConfigurationError: If the value is empty or not a JSON object
        """
        if not self.credentials.strip():
            raise ProviderConfigurationError("GOOGLE_CREDENTIALS is not set")
        try:
            info = json.loads(self.credentials)
        except json.JSONDecodeError as e:
            raise ProviderConfigurationError(
                f"GOOGLE_CREDENTIALS is not valid JSON: {e.msg}"
            ) from e
        if not isinstance(info, dict):
            raise ProviderConfigurationError("GOOGLE_CREDENTIALS must be a JSON object")
        return info


class ClientSettings(BaseSettings):
    """Settings for the batch/preview client and the CLI."""

    model_config = SettingsConfigDict(env_prefix="CLIENT_", env_file=".env", extra="ignore")

    base_url: str = Field(default="http://127.0.0.1:8000")
    timeout_seconds: float = Field(default=60.0, gt=0)
    preferences_path: str = Field(default="~/.config/jtts/settings.json")
    output_dir: str = Field(default="./downloads")


class Settings(BaseSettings):
    """Combined application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)

    # Logging settings
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "pretty"] = Field(default="pretty", alias="LOG_FORMAT")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
