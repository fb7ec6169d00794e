"""Application settings and configuration management."""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Hotel backend REST API configuration."""

    base_url: str = "http://localhost:8000/api"
    api_token: Optional[str] = None  # Opaque bearer credential, issued elsewhere
    request_timeout: int = 30
    max_retries: int = 3  # Applies to reads only; the check-in write is sent once

    model_config = SettingsConfigDict(env_prefix="BACKEND_")


class CheckInSettings(BaseSettings):
    """Defaults used while assembling check-in payloads."""

    fallback_room_id: int = Field(default=1, gt=0)
    placeholder_client_id: int = Field(default=1, gt=0)  # Wire value sent when the titular is resolved by the backend
    assignment_label: str = "Asignación desde FrontDesk"
    observation_placeholder: str = "Check-in desde FrontDesk"

    # Fixed-test strategy (diagnostics only)
    test_client_id: int = 1
    test_assignment_label: str = "Test desde FrontDesk"
    test_observation: str = "Check-in de prueba"
    test_adults: int = 2
    test_children: int = 0
    test_infants: int = 0

    model_config = SettingsConfigDict(env_prefix="CHECKIN_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Sub-settings
    backend: BackendSettings = BackendSettings()
    checkin: CheckInSettings = CheckInSettings()
    logging: LoggingSettings = LoggingSettings()

    # Top-level overrides from .env (BACKEND_URL / API_TOKEN) take precedence over nested backend.*
    backend_url: str = ""
    api_token: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def backend_base_url(self) -> str:
        """Backend base URL without a trailing slash."""
        return (self.backend_url or self.backend.base_url or "").strip().rstrip("/")

    def backend_api_token(self) -> Optional[str]:
        """Bearer token for the backend, if one is configured."""
        token = (self.api_token or self.backend.api_token or "").strip()
        return token or None


# Global settings instance
settings = Settings()
