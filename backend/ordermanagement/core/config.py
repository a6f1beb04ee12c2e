"""
Centralized configuration management using Pydantic Settings.

This module provides type-safe configuration management with validation,
loading settings from environment variables and .env files.

The ``environment`` field acts as the active profile: ``test`` switches the
payment provider into always-succeed mode so test runs stay deterministic.
"""

from typing import Annotated, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Secrets should never be committed to code - use .env file (gitignored).
    """

    # API Configuration
    api_prefix: str = Field(
        default="/api",
        description="Prefix for all REST endpoints"
    )
    project_name: str = Field(
        default="Order Management System API",
        description="Project name displayed in API docs"
    )
    environment: str = Field(
        default="development",
        description="Active profile: development, test or production"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/ordermanagement.db",
        description="Database connection URL (embedded SQLite or PostgreSQL)"
    )
    db_create_all: bool = Field(
        default=True,
        description="Create missing tables at startup"
    )
    seed_data: bool = Field(
        default=True,
        description="Insert reference customers and products at startup when empty"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    log_json: bool = Field(
        default=True,
        description="Emit structured JSON log lines (plain text otherwise)"
    )

    # External provider simulation
    payment_latency_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Simulated payment provider round trip"
    )
    payment_failure_rate: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Probability that the payment provider declines a charge"
    )
    shipping_latency_seconds: float = Field(
        default=0.2,
        ge=0.0,
        description="Simulated shipping carrier round trip"
    )
    auto_ship_on_payment: bool = Field(
        default=True,
        description="Ship orders automatically once their payment is processed"
    )

    # CORS Configuration
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (frontend URLs)"
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow cookies/credentials in CORS requests"
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
        env_nested_delimiter="__",  # Support nested config via env vars
    )

    @property
    def is_test(self) -> bool:
        """True when the ``test`` profile is active."""
        return self.environment == "test"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """
        Parse cors_origins from JSON string or list.

        Handles both JSON array strings and Python lists for flexibility.
        Supports comma-separated origins for easier .env configuration.
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # Fallback: split by comma if not valid JSON
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalize the profile name and reject unknown profiles."""
        normalized = v.strip().lower()
        allowed = ["development", "test", "production"]
        if normalized not in allowed:
            raise ValueError(
                f"ENVIRONMENT must be one of: {', '.join(allowed)}. Got: {v}"
            )
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL is not a valid level: {v}")
        return level

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """
        Validate database URL format.

        Ensures URL has proper scheme and is not a placeholder.
        Supports embedded SQLite and PostgreSQL.
        """
        if not v or v.strip() == "":
            raise ValueError("DATABASE_URL is required and cannot be empty")

        # Check for valid database schemes
        valid_schemes = ["sqlite", "sqlite+aiosqlite", "postgresql", "postgresql+asyncpg"]
        if not any(v.startswith(scheme + "://") or v.startswith(scheme + ":///") for scheme in valid_schemes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {', '.join(valid_schemes)}. "
                f"Got: {v[:20]}..."
            )

        return v


# Global settings instance
# Import this instance throughout the application
settings = Settings()
