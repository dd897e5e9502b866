# server_timing/__init__.py
"""
Server-Timing header middleware for FastAPI / Starlette.

Collects named timings during a request and sends them back as a single
``Server-Timing`` response header.
"""

from .errors import ConfigurationError
from .config import (
    FROM_CONFIG,
    FromConfigStore,
    FromEnv,
    ResolvedTimingConfig,
    ServerTimingOptions,
    TimeUnit,
    init_options,
    resolve_config,
)
from .timing import (
    RequestTimer,
    TimingEntry,
    attach_timings,
    begin_request,
    capture_timing,
    end_request,
    timing,
)
from .middleware import ServerTimingMiddleware

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "FROM_CONFIG",
    "FromConfigStore",
    "FromEnv",
    "ResolvedTimingConfig",
    "ServerTimingOptions",
    "TimeUnit",
    "init_options",
    "resolve_config",
    "RequestTimer",
    "TimingEntry",
    "attach_timings",
    "begin_request",
    "capture_timing",
    "end_request",
    "timing",
    "ServerTimingMiddleware",
]
