"""
Errand Platform backend configuration using Pydantic Settings.

Provides centralized configuration for:
- MongoDB connection (required connection string)
- API settings (host, port, CORS)
- Credential hashing and access tokens
- Agent proximity search bounds
- Logging and monitoring

All settings support environment variable overrides and .env file loading.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Variables are read without a prefix (e.g., MONGO_URI, PORT).
    MONGO_URI has no default: constructing Settings without it raises
    a ValidationError, which the entry point treats as fatal.
    """

    # =========================================================================
    # API Settings
    # =========================================================================

    app_name: str = Field(
        default="Errand Platform Backend",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="API version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )
    environment: str = Field(
        default="development",
        description="Environment: development|staging|production"
    )

    host: str = Field(
        default="0.0.0.0",
        description="API bind host"
    )
    port: int = Field(
        default=5000,
        description="API bind port",
        gt=0,
        lt=65536
    )

    # =========================================================================
    # Database Settings (MongoDB)
    # =========================================================================

    mongo_uri: str = Field(
        ...,
        min_length=1,
        description="MongoDB connection string, e.g. mongodb://127.0.0.1:27017/errand"
    )
    database_name: str = Field(
        default="errand",
        description="Database used when the connection string names none"
    )
    mongo_server_selection_timeout_ms: int = Field(
        default=5000,
        description="How long a connection attempt waits for a server (ms)",
        gt=0
    )

    # =========================================================================
    # CORS Settings
    # =========================================================================

    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    cors_allow_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods"
    )
    cors_allow_headers: List[str] = Field(
        default=["*"],
        description="Allowed HTTP headers"
    )

    # =========================================================================
    # Credentials and Access Tokens
    # =========================================================================

    jwt_secret_key: str = Field(
        default="change-this-secret-key-in-production-minimum-32-chars",
        description="Secret key used to sign issued access tokens",
        min_length=32
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    jwt_access_token_expire_minutes: int = Field(
        default=60,
        description="Access token lifetime in minutes",
        gt=0,
        le=1440
    )
    password_min_length: int = Field(
        default=8,
        description="Minimum password length for registration",
        ge=6,
        le=128
    )

    # =========================================================================
    # Agent Search
    # =========================================================================

    agent_search_default_radius_km: float = Field(
        default=5.0,
        description="Radius used by /api/agents/find when none is given (km)",
        gt=0
    )
    agent_search_max_radius_km: float = Field(
        default=100.0,
        description="Upper bound applied to requested search radius (km)",
        gt=0
    )

    # =========================================================================
    # Request Normalization
    # =========================================================================

    task_route_prefixes: List[str] = Field(
        default=["/api/tasks", "/tasks"],
        description="Path prefixes whose JSON bodies get userId derived from email"
    )

    # =========================================================================
    # Logging and Monitoring
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG|INFO|WARNING|ERROR|CRITICAL"
    )
    log_format: str = Field(
        default="json",
        description="Log format: json|text"
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got: {v}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: List[str]) -> List[str]:
        """Fall back to allowing every origin when the list is empty."""
        if not v:
            return ["*"]
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once from the environment and the .env file.

    Raises:
        pydantic.ValidationError: If MONGO_URI is missing or a value is invalid
    """
    return Settings()


def clear_settings_cache():
    """Clear the settings cache so the next call reloads the environment."""
    get_settings.cache_clear()
