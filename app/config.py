"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

import logging
from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="MenuHub", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Menu backend the client talks to
    api_host: str = Field(default="localhost", description="Menu API host")
    api_port: int = Field(default=3000, ge=1, le=65535, description="Menu API port")
    api_scheme: str = Field(default="http", description="Menu API scheme")
    api_prefix: str = Field(default="", description="API route prefix")
    request_timeout_sec: float = Field(
        default=10.0, gt=0, description="Flat per-request timeout for menu API calls"
    )

    # Client-side persisted session (token + user identity)
    session_db_url: str = Field(
        default="sqlite:///menuhub_session.db",
        description="SQLAlchemy URL of the local session store",
    )

    # Demo backend settings
    host: str = Field(default="0.0.0.0", description="Demo server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Demo server port")
    demo_db_url: str = Field(
        default="sqlite://", description="SQLAlchemy URL of the demo backend database"
    )
    demo_username: str = Field(default="admin", description="Demo backend login user")
    demo_password: str = Field(default="admin", description="Demo backend login password")
    seed_demo_data: bool = Field(
        default=True, description="Seed today's example menu on demo startup"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    api_title: str = Field(
        default="MenuHub Demo API", description="API documentation title"
    )
    api_description: str = Field(
        default="In-memory cafeteria menu backend for offline and demo use",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @property
    def api_base_url(self) -> str:
        """Base URL of the menu backend, including the route prefix."""
        return f"{self.api_scheme}://{self.api_host}:{self.api_port}{self.api_prefix}"

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


def setup_logging(config: "Settings") -> None:
    """Configure root logging from the given settings."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()), format=config.log_format
    )


# Global settings instance
settings = Settings()
