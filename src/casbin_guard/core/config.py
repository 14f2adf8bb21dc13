"""
Configuration management using Pydantic Settings.

Type-safe configuration loaded from environment variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from casbin_guard.core.config import get_settings

    settings = get_settings()
    model_path = settings.casbin_model_path

    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from casbin_guard.core.enums import Environment


class Settings(BaseSettings):
    """
    Application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="casbin-guard",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Casbin configuration
    casbin_model_path: str = Field(
        default="config/model.conf",
        description="Path to the Casbin model file (e.g. config/model.conf)",
    )
    casbin_policy_path: str = Field(
        default="config/policy.csv",
        description="Path to the Casbin CSV policy file",
    )

    # Subject resolution
    subject_source: Literal["jwt", "session"] = Field(
        default="jwt",
        description="Where the demo app reads the subject from (jwt or session)",
    )

    # JWT configuration
    secret_key: str = Field(
        description="Secret key for JWT signing (at least 32 bytes)",
    )
    algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Access token expiration time in minutes",
    )

    # Session configuration
    session_secret_key: str | None = Field(
        default=None,
        description="Secret used to sign the session cookie (required for session mode)",
    )
    session_cookie_name: str = Field(
        default="SESSIONID",
        description="Cookie carrying the session id",
    )
    session_max_age_seconds: int = Field(
        default=3600,
        description="Session cookie lifetime in seconds",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate JWT secret key length.

        Args:
            v: Secret key.

        Returns:
            str: Validated secret key.

        Raises:
            ValueError: If the key is shorter than 32 bytes.
        """
        if len(v.encode()) < 32:
            raise ValueError("secret_key must be at least 32 bytes")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()  # type: ignore[call-arg]
