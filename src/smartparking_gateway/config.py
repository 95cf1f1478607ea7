"""Configuration for the SmartParking gateway.

Uses Pydantic settings for environment-based configuration.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class GatewaySettings(BaseSettings):
    """Configuration settings for the SmartParking gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SMARTPARKING_GATEWAY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Identity
    SERVICE_NAME: str = "smartparking-gateway"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment for the gateway",
    )

    # Remote API
    API_BASE_URL: str = Field(
        default="http://localhost:8000/api",
        description="Base URL every endpoint path is appended to",
    )
    LOGIN_PATH: str = Field(default="/auth/login/", description="Login endpoint path")
    REGISTER_PATH: str = Field(default="/auth/register/", description="Register endpoint path")
    LOGOUT_PATH: str = Field(default="/auth/logout/", description="Logout endpoint path")
    REFRESH_PATH: str = Field(
        default="/auth/token/refresh/",
        description="Endpoint exchanging a refresh token for a new access token",
    )

    # Presentation
    LOGIN_VIEW_PATH: str = Field(
        default="/login",
        description="Unauthenticated entry point the user is sent to on forced logout",
    )

    # Persistence
    STORAGE_PATH: Path = Field(
        default=Path.home() / ".smartparking" / "session.json",
        description="JSON file holding the persisted credential and identity",
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="HTTP client request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="HTTP client connection timeout in seconds",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    def build_url(self, endpoint: str) -> str:
        """Join an endpoint path onto the API base URL."""
        return f"{self.API_BASE_URL.rstrip('/')}{endpoint}"


# Global settings instance
settings = GatewaySettings()
