# server_timing/config/app_config.py
"""
Complete application configuration with validation.
"""

from pydantic import BaseModel, Field
from .config_types import EnvBool, Environment, TimeUnit
from .env_config import get_env, parse_env_enum, require_env
from .logging_config import LoggingConfig

_default_header_unit_env_key = "SERVER_TIMING_HEADER_UNIT"
_default_enabled_env_key = "SERVER_TIMING_ENABLED"


class ServerTimingSettings(BaseModel):
    """
    Server timing settings seeded into the config store at startup.

    Middleware installed with ``FROM_CONFIG`` reads these values.
    """

    header_unit: TimeUnit = Field(default=TimeUnit.MILLISECOND)
    enabled: bool = Field(default=True)

    model_config = {"frozen": True}


class AppConfig(BaseModel):
    """
    Complete application configuration.

    All configuration is loaded from environment variables and validated
    at startup. Invalid configuration will fail fast with clear error messages.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")  # Semantic versioning
    environment: Environment

    logging: LoggingConfig
    server_timing: ServerTimingSettings

    model_config = {"frozen": True}


def load_server_timing_settings(
    environment: Environment,
    header_unit_env_key: str = _default_header_unit_env_key,
    enabled_env_key: str = _default_enabled_env_key,
) -> ServerTimingSettings:
    """
    Load server timing settings from environment.

    Environment variables (all optional):
    - SERVER_TIMING_HEADER_UNIT: second, millisecond, microsecond, nanosecond, native
      (default millisecond)
    - SERVER_TIMING_ENABLED: true or false (default true, false in production)

    Raises:
        ConfigurationError: If a variable holds an unrecognized value
    """
    default_enabled = EnvBool.FALSE if environment.is_production else EnvBool.TRUE

    header_unit = parse_env_enum(
        header_unit_env_key,
        get_env(header_unit_env_key, TimeUnit.MILLISECOND.value),
        TimeUnit,
    )
    enabled = parse_env_enum(
        enabled_env_key,
        get_env(enabled_env_key, default_enabled.value),
        EnvBool,
    )

    return ServerTimingSettings(header_unit=header_unit, enabled=enabled.as_bool)


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    from .logging_config import load_logging_config

    environment = parse_env_enum(
        "ENVIRONMENT", require_env("ENVIRONMENT"), Environment
    )

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=environment,
        logging=load_logging_config(),
        server_timing=load_server_timing_settings(environment),
    )


__all__ = [
    "AppConfig",
    "ServerTimingSettings",
    "load_server_timing_settings",
    "load_app_config",
]
