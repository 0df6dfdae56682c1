"""
Config Schema Validation

Pydantic models for validating config.yaml structure.
Provides clear error messages when configuration is invalid.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """Application database connection configuration"""

    url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy database URL (e.g. sqlite:///./data/casedesk.db)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_to_file: bool = Field(default=True, description="Enable file logging")


class ApplicationConfig(BaseModel):
    """Application settings"""

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Deployment environment (controls error detail in responses)",
    )
    timezone: str = Field(
        default="UTC",
        description="IANA timezone name (e.g., America/Santiago)",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone"""
        try:
            from zoneinfo import ZoneInfo

            ZoneInfo(v)
        except Exception:
            raise ValueError(
                f"Invalid timezone '{v}'. Use IANA format like 'America/Santiago' or 'UTC'"
            )
        return v


class SecurityConfig(BaseModel):
    """Token and CORS settings"""

    access_token_expire_minutes: int = Field(default=60 * 24, ge=1, le=60 * 24 * 30)
    refresh_token_expire_days: int = Field(default=7, ge=1, le=90)
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class RateLimitConfig(BaseModel):
    """Rate limiting windows (slowapi / limits notation)"""

    enabled: bool = Field(default=True)
    default: str = Field(default="100/15minutes", description="Limit applied to every route")
    auth: str = Field(default="5/15minutes", description="Limit for login and token refresh")
    storage_uri: str = Field(default="memory://", description="Shared store for scaled deployments")


class AppConfig(BaseModel):
    """
    Root configuration model for config.yaml

    Validates the entire configuration structure on load.
    """

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    application: ApplicationConfig = Field(default_factory=ApplicationConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    rate_limits: RateLimitConfig = Field(default_factory=RateLimitConfig)

    model_config = {"populate_by_name": True}

    def to_settings_overrides(self) -> dict:
        """Flatten into APISettings field names"""
        overrides = {
            "environment": self.application.environment,
            "timezone": self.application.timezone,
            "log_level": self.application.logging.level,
            "log_to_file": self.application.logging.log_to_file,
            "access_token_expire_minutes": self.security.access_token_expire_minutes,
            "refresh_token_expire_days": self.security.refresh_token_expire_days,
            "cors_origins": self.security.cors_origins,
            "rate_limit_enabled": self.rate_limits.enabled,
            "rate_limit_default": self.rate_limits.default,
            "rate_limit_auth": self.rate_limits.auth,
            "rate_limit_storage_uri": self.rate_limits.storage_uri,
        }
        if self.database.url:
            overrides["database_url"] = self.database.url
        return overrides


def validate_config(config_dict: dict) -> AppConfig:
    """
    Validate a config dictionary against the schema.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        pydantic.ValidationError: If config is invalid
    """
    return AppConfig.model_validate(config_dict)


def get_validation_errors(config_dict: dict) -> List[str]:
    """
    Get a list of validation errors for a config dictionary.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        List of error messages (empty if valid)
    """
    try:
        validate_config(config_dict)
        return []
    except Exception as e:
        from pydantic import ValidationError

        if isinstance(e, ValidationError):
            return [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
        return [str(e)]
