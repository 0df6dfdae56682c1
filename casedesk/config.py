### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - API Configuration -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Configuration Management

Uses Pydantic Settings for configuration with environment variable support.
Loads settings from environment (CASEDESK_*), .env file and an optional
data/config.yaml.

Precedence (highest first):
1. CASEDESK_* environment variables
2. config.yaml (CASEDESK_CONFIG_PATH or data/config.yaml)
3. Defaults declared on APISettings
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

import yaml
from pydantic_settings import BaseSettings

from casedesk.config_schema import validate_config

ENV_PREFIX = "CASEDESK_"


def get_project_root() -> Path:
    """Get the project root directory"""
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """
    Get the path to config.yaml.

    Priority:
    1. CASEDESK_CONFIG_PATH environment variable (if set)
    2. data/config.yaml under the project root
    """
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return get_project_root() / "data" / "config.yaml"


def get_version() -> str:
    """Read version from VERSION file"""
    version_file = get_project_root() / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


class APISettings(BaseSettings):
    """API Server Settings"""

    # API Configuration
    api_title: str = "CaseDesk API"
    api_version: str = get_version()
    api_prefix: str = "/api"
    environment: str = "development"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Database Configuration
    database_url: str = "sqlite:///./data/casedesk.db"

    # Tokens
    jwt_secret: str = "change-this-in-production"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "casedesk"
    access_token_expire_minutes: int = 60 * 24
    refresh_token_expire_days: int = 7

    # Password hashing cost
    bcrypt_rounds: int = 12

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    rate_limit_default: str = "100/15minutes"
    rate_limit_auth: str = "5/15minutes"

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    timezone: str = "UTC"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    class Config:
        env_prefix = ENV_PREFIX
        env_file = ".env"
        extra = "ignore"


DEFAULT_CONFIG = """# CaseDesk Configuration
# Values here apply when the matching CASEDESK_* environment variable is unset.

# Application database (any SQLAlchemy URL)
database:
  url: "sqlite:///./data/casedesk.db"

# Application Settings
application:
  # development, test or production (production hides error detail)
  environment: "development"

  # Timezone for logs and timestamps (IANA timezone name)
  timezone: "UTC"

  logging:
    level: "INFO"             # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_to_file: true         # Write daily files under logs/

# Tokens and browser access
security:
  access_token_expire_minutes: 1440
  refresh_token_expire_days: 7
  cors_origins:
    - "http://localhost:3000"

# Rate limits ("<count>/<window>", e.g. 100/15minutes)
rate_limits:
  enabled: true
  default: "100/15minutes"
  auth: "5/15minutes"          # Login and token refresh
  storage_uri: "memory://"     # e.g. redis://host:6379 when scaled out
"""


def load_yaml_config(config_path: str | None = None) -> dict:
    """Load configuration from YAML file, empty when the file is absent"""
    config_file = get_config_path() if config_path is None else Path(config_path)

    if not config_file.exists():
        return {}

    with open(config_file, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def write_default_config(config_path: str | None = None) -> Path:
    """Write DEFAULT_CONFIG to disk, returning the path written"""
    config_file = get_config_path() if config_path is None else Path(config_path)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        f.write(DEFAULT_CONFIG)
    return config_file


def yaml_overrides(config: dict) -> dict:
    """
    Settings values from a config dict, minus the ones set in the environment.

    Raises pydantic.ValidationError when the file does not match the schema.
    """
    if not config:
        return {}
    overrides = validate_config(config).to_settings_overrides()
    return {
        name: value
        for name, value in overrides.items()
        if f"{ENV_PREFIX}{name.upper()}" not in os.environ
    }


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings instance"""
    return APISettings(**yaml_overrides(load_yaml_config()))
