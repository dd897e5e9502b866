# server_timing/logger/logger.py
"""
Application logger wrapper around structlog.

Usage:
    from server_timing.logger import get_app_logger

    logger = get_app_logger(__name__)
    logger.info("Server timing attached", entries=3)
"""
from typing import Any, Dict, Optional
import structlog

from server_timing.config.structlog_config import (
    config_generation,
    get_logger as _get_structlog_logger,
)


class AppLogger:
    """
    Application logger wrapper.

    Resolves the structlog logger lazily so importing a module never forces
    structlog configuration, and resolves it again after structlog is
    reconfigured. Context bound with ``bind`` is added to every event.
    """

    def __init__(
        self, name: str = "server_timing", context: Optional[Dict[str, Any]] = None
    ) -> None:
        self._name = name
        self._context: Dict[str, Any] = dict(context or {})
        self._logger_instance: Optional[structlog.BoundLogger] = None
        self._generation = -1

    @property
    def _logger(self) -> structlog.BoundLogger:
        if self._logger_instance is None or self._generation != config_generation():
            self._logger_instance = _get_structlog_logger(self._name).bind(
                **self._context
            )
            self._generation = config_generation()
        return self._logger_instance

    def bind(self, **context: Any) -> "AppLogger":
        """Return a logger that adds ``context`` to every event."""
        return AppLogger(self._name, {**self._context, **context})

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._logger.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._logger.info(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._logger.warning(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self._logger.error(msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        """Log critical message."""
        self._logger.critical(msg, **kwargs)


def get_app_logger(name: str = "server_timing") -> AppLogger:
    """
    Get application logger instance.

    Args:
        name: Logger name

    Returns:
        AppLogger instance
    """
    return AppLogger(name)


__all__ = ["AppLogger", "get_app_logger"]
