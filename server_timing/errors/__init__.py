# server_timing/errors/__init__.py
from .config_error import ConfigurationError, config_error_from_validation

__all__ = ["ConfigurationError", "config_error_from_validation"]
