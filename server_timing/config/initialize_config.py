# server_timing/config/initialize_config.py
"""
Configuration initialization module.

Handles the complete application configuration lifecycle.
"""
from typing import Optional
from pydantic import ValidationError
from server_timing.errors import config_error_from_validation
from .app_config import AppConfig, load_app_config
from .config_store import set_store_value
from .structlog_config import configure_structlog


class _ConfigState:
    """
    Singleton holding the validated application configuration.
    """

    _instance: Optional["_ConfigState"] = None
    _config: Optional[AppConfig]

    def __new__(cls) -> "_ConfigState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = None
        return cls._instance

    @property
    def config(self) -> AppConfig:
        """Get application configuration."""
        if not self._config:
            raise RuntimeError(
                "Configuration not initialized. Call initialize_config() at startup."
            )
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    def set_config(self, config: AppConfig) -> None:
        """Set application configuration."""
        self._config = config


_state = _ConfigState()


def initialize_config() -> None:
    """
    Initialize and validate all application configuration.

    Call once at application startup. Loads and validates the environment,
    configures structlog and seeds the config store with the server timing
    settings so middleware installed with ``FROM_CONFIG`` can read them.

    Raises:
        ConfigurationError: If configuration is invalid or missing
    """
    try:
        config = load_app_config()
    except ValidationError as e:
        raise config_error_from_validation(e) from e

    configure_structlog(config.logging.level_int)

    set_store_value("header_unit", config.server_timing.header_unit)
    set_store_value("enabled", config.server_timing.enabled)

    _state.set_config(config)


def get_config() -> AppConfig:
    """
    Get validated application configuration.

    Raises:
        RuntimeError: If not initialized
    """
    return _state.config


__all__ = ["initialize_config", "get_config"]
