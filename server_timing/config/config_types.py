# server_timing/config/config_types.py
"""Configuration type definitions."""

from enum import Enum
import logging

# time.perf_counter_ns() ticks once per nanosecond
NATIVE_TICKS_PER_SECOND = 1_000_000_000


class EnvBool(str, Enum):
    TRUE = "true"
    FALSE = "false"

    @property
    def as_bool(self) -> bool:
        return self is EnvBool.TRUE

    def __str__(self) -> str:
        """Return string value for easy printing."""
        return self.value


class EnvLogLevel(str, Enum):
    """
    Supported log levels.

    Inherits from str so enum values serialize naturally to JSON/strings
    without custom serialization logic.

    Examples:
        >>> EnvLogLevel.INFO
        <EnvLogLevel.INFO: 'INFO'>
        >>> str(EnvLogLevel.INFO)
        'INFO'
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def level(self) -> int:
        """Get numeric logging level for stdlib logging module."""
        return getattr(logging, self.value)

    def __str__(self) -> str:
        return self.value


class TimeUnit(str, Enum):
    """
    Units a duration can be captured in or rendered as.

    ``NATIVE`` is the tick of ``time.perf_counter_ns()``. Bare numbers passed
    to ``capture_timing`` are read in this unit.

    Examples:
        >>> TimeUnit("second")
        <TimeUnit.SECOND: 'second'>
        >>> TimeUnit.MILLISECOND.per_second
        1000
    """

    SECOND = "second"
    MILLISECOND = "millisecond"
    MICROSECOND = "microsecond"
    NANOSECOND = "nanosecond"
    NATIVE = "native"

    @property
    def per_second(self) -> int:
        """How many of this unit fit in one second."""
        return _UNITS_PER_SECOND[self]

    def __str__(self) -> str:
        return self.value


_UNITS_PER_SECOND = {
    TimeUnit.SECOND: 1,
    TimeUnit.MILLISECOND: 1_000,
    TimeUnit.MICROSECOND: 1_000_000,
    TimeUnit.NANOSECOND: 1_000_000_000,
    TimeUnit.NATIVE: NATIVE_TICKS_PER_SECOND,
}


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def is_production(self) -> bool:
        """Check if production environment."""
        return self == Environment.PRODUCTION

    def __str__(self) -> str:
        return self.value


__all__ = [
    "NATIVE_TICKS_PER_SECOND",
    "EnvBool",
    "EnvLogLevel",
    "TimeUnit",
    "Environment",
]
