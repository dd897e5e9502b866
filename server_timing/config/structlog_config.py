# server_timing/config/structlog_config.py
"""
Structlog configuration module.
Configured once per process via configure_structlog(); get_logger() falls back
to INFO so the middleware can log inside applications that never configure it.
An explicit configure_structlog() call replaces that fallback.
"""
import logging
import os
import sys
import threading
from typing import Optional
import structlog
from rich.traceback import install as install_rich_traceback

install_rich_traceback(show_locals=False, width=None, extra_lines=3)

_FALLBACK_LOG_LEVEL = logging.INFO


class _StructlogState:
    """
    Thread-safe, process-safe singleton for structlog configuration state.

    Handles multiprocess scenarios (like uvicorn reload) by remembering which
    process did the configuring.
    """

    _instance: Optional["_StructlogState"] = None
    _lock = threading.Lock()

    _initialized: bool
    _is_fallback: bool
    _generation: int
    _log_level: Optional[int]
    _process_id: Optional[int]

    def __new__(cls) -> "_StructlogState":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:  # Double-check locking
                    instance = super().__new__(cls)
                    instance._initialized = False
                    instance._is_fallback = False
                    instance._generation = 0
                    instance._log_level = None
                    instance._process_id = None
                    cls._instance = instance
        return cls._instance

    @property
    def is_configured(self) -> bool:
        """Check if configured in the CURRENT process."""
        return self._initialized and self._process_id == os.getpid()

    @property
    def log_level(self) -> Optional[int]:
        return self._log_level

    @property
    def is_fallback(self) -> bool:
        return self.is_configured and self._is_fallback

    @property
    def generation(self) -> int:
        """Incremented on every structlog.configure() call made here."""
        return self._generation

    def mark_configured(self, log_level: int, fallback: bool = False) -> None:
        """Mark structlog as configured with given level in this process."""
        with self._lock:
            self._log_level = log_level
            self._is_fallback = fallback
            self._generation += 1
            self._process_id = os.getpid()
            self._initialized = True

    def reset(self) -> None:
        """Reset state. FOR TESTING ONLY."""
        with self._lock:
            self._initialized = False
            self._is_fallback = False
            self._log_level = None
            self._process_id = None


_state = _StructlogState()


def configure_structlog(log_level: int) -> None:
    """
    Configure structlog with the specified log level.

    Replaces the INFO fallback installed by get_logger(), if any.

    Args:
        log_level: Numeric logging level (e.g., logging.INFO)

    Raises:
        RuntimeError: If already configured in the same process with different level
    """
    if _state.is_configured and not _state.is_fallback:
        # Idempotent - allow reconfiguration with same level
        if _state.log_level == log_level:
            return
        raise RuntimeError(
            f"structlog already configured in this process. "
            f"Current level: {_state.log_level}, attempted: {log_level}"
        )

    _configure(log_level)
    _state.mark_configured(log_level)


def _configure(log_level: int) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,  # type: ignore[list-item]
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=False,
                    width=None,
                    suppress=["starlette", "uvicorn", "fastapi", "anyio"],
                ),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "server_timing") -> structlog.BoundLogger:
    """
    Get a structlog logger instance, configuring INFO level on first use
    if the application has not configured structlog itself.
    """
    if not _state.is_configured:
        _configure(_FALLBACK_LOG_LEVEL)
        _state.mark_configured(_FALLBACK_LOG_LEVEL, fallback=True)
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check if structlog has been configured in this process."""
    return _state.is_configured


def config_generation() -> int:
    """Counter bumped on every (re)configuration; cached loggers compare against it."""
    return _state.generation


__all__ = [
    "configure_structlog",
    "get_logger",
    "is_configured",
    "config_generation",
]
