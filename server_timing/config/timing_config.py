# server_timing/config/timing_config.py
"""
Server timing options and their per-request resolution.

Each option is given once, when the middleware is installed, in one of three
raw forms:

    header_unit: TimeUnit | FROM_CONFIG | FromEnv("VAR")   (default millisecond)
    enabled:     bool     | FROM_CONFIG | FromEnv("VAR")   (default True)

``resolve_config`` turns the raw form into a ``ResolvedTimingConfig`` with
concrete values. It runs on every request so store and environment changes
are picked up without a restart.
"""

from dataclasses import dataclass
from typing import Any, Union
from pydantic import BaseModel, InstanceOf, StrictBool, ValidationError
from server_timing.errors import ConfigurationError, config_error_from_validation
from .config_types import EnvBool, TimeUnit
from .config_store import get_store_value
from .env_config import get_env, parse_env_enum


@dataclass(frozen=True)
class FromConfigStore:
    """Read the option from the config store at request time."""


FROM_CONFIG = FromConfigStore()


@dataclass(frozen=True)
class FromEnv:
    """Read the option from the environment variable ``var_name`` at request time."""

    var_name: str


# Sentinels are matched by type only; a plain dict must not validate into one
HeaderUnitOption = Union[TimeUnit, InstanceOf[FromConfigStore], InstanceOf[FromEnv]]
EnabledOption = Union[bool, InstanceOf[FromConfigStore], InstanceOf[FromEnv]]


class ServerTimingOptions(BaseModel):
    """Raw middleware options, possibly holding deferred lookups."""

    header_unit: HeaderUnitOption = TimeUnit.MILLISECOND
    enabled: EnabledOption = True

    model_config = {"frozen": True}


class ResolvedTimingConfig(BaseModel):
    """Options after every deferred lookup has been substituted."""

    header_unit: TimeUnit
    enabled: StrictBool

    model_config = {"frozen": True}


def init_options(**opts: Any) -> ServerTimingOptions:
    """
    Build middleware options, applying defaults for omitted fields.

    Raises:
        ConfigurationError: If a value is not one of the accepted raw forms
    """
    try:
        return ServerTimingOptions(**opts)
    except ValidationError as e:
        raise config_error_from_validation(e, "Invalid server timing options") from e


def _resolve_header_unit(value: HeaderUnitOption) -> Any:
    if isinstance(value, FromConfigStore):
        return get_store_value("header_unit")
    if isinstance(value, FromEnv):
        return parse_env_enum(value.var_name, get_env(value.var_name), TimeUnit)
    return value


def _resolve_enabled(value: EnabledOption) -> Any:
    if isinstance(value, FromConfigStore):
        return get_store_value("enabled")
    if isinstance(value, FromEnv):
        return parse_env_enum(value.var_name, get_env(value.var_name), EnvBool).as_bool
    return value


def resolve_config(options: ServerTimingOptions) -> ResolvedTimingConfig:
    """
    Substitute store and environment lookups with concrete values.

    Args:
        options: Raw options from ``init_options``

    Returns:
        ResolvedTimingConfig with a concrete unit and flag

    Raises:
        ConfigurationError: If a store key is missing, an environment variable
            is unset or outside its whitelist, or a stored value has the
            wrong type
    """
    header_unit = _resolve_header_unit(options.header_unit)
    enabled = _resolve_enabled(options.enabled)

    try:
        return ResolvedTimingConfig(header_unit=header_unit, enabled=enabled)
    except ValidationError as e:
        raise config_error_from_validation(
            e, "Invalid resolved server timing configuration"
        ) from e


__all__ = [
    "FromConfigStore",
    "FROM_CONFIG",
    "FromEnv",
    "HeaderUnitOption",
    "EnabledOption",
    "ServerTimingOptions",
    "ResolvedTimingConfig",
    "init_options",
    "resolve_config",
    "ConfigurationError",
]
