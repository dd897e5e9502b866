# server_timing/config/env_config.py
import os
from enum import Enum
from typing import Optional, Type, TypeVar
from server_timing.errors import ConfigurationError

E = TypeVar("E", bound=Enum)


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get Env variable with optional default
    """
    return os.getenv(name, default=default)


def require_env(name: str) -> str:
    """
    Get required environment variable or raise immediately.
    """
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Missing required env variables: {name}")
    return value


def parse_env_enum(name: str, value: Optional[str], enum_cls: Type[E]) -> E:
    """
    Map a raw environment value onto one of ``enum_cls`` members.

    Args:
        name: Environment variable name, used in the error message
        value: Raw value (``None`` when the variable is unset)
        enum_cls: Enum whose values form the whitelist

    Raises:
        ConfigurationError: If the value is unset or not in the whitelist
    """
    try:
        return enum_cls(value)
    except ValueError as exc:
        valid_values = [member.value for member in enum_cls]
        raise ConfigurationError(
            f"Invalid {name}: {value!r}. Must be one of: {valid_values}"
        ) from exc


__all__ = ["require_env", "get_env", "parse_env_enum"]
