# server_timing/middleware/server_timing_middleware.py
"""
Server-Timing middleware for FastAPI / Starlette.

Usage Example:
    from fastapi import FastAPI
    from server_timing import FromEnv, ServerTimingMiddleware, TimeUnit, timing

    app = FastAPI()

    app.add_middleware(
        ServerTimingMiddleware,
        header_unit=TimeUnit.MILLISECOND,
        enabled=FromEnv("SERVER_TIMING_ENABLED"),
    )

    @app.get("/items")
    async def items():
        with timing("db", "Item query"):
            rows = await fetch_items()
        return rows
"""

from typing import Awaitable, Callable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from server_timing.config.config_types import TimeUnit
from server_timing.config.timing_config import (
    EnabledOption,
    HeaderUnitOption,
    init_options,
)
from server_timing.errors import ConfigurationError
from server_timing.logger import get_app_logger
from server_timing.timing.collector import begin_request, end_request


class ServerTimingMiddleware(BaseHTTPMiddleware):
    """
    Collects timings recorded during a request into one Server-Timing header.

    Options are parsed once, when the middleware is installed. Deferred
    options (``FROM_CONFIG`` / ``FromEnv``) are resolved on every request.

    Usage:
        app.add_middleware(ServerTimingMiddleware)

        app.add_middleware(
            ServerTimingMiddleware,
            header_unit=FROM_CONFIG,
            enabled=FROM_CONFIG,
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        header_unit: HeaderUnitOption = TimeUnit.MILLISECOND,
        enabled: EnabledOption = True,
        logger_name: Optional[str] = None,
    ):
        """
        Initialize server timing middleware.

        Args:
            app: ASGI application
            header_unit: Unit rendered durations are converted to
            enabled: Whether timings are collected and emitted
            logger_name: Custom logger name (defaults to module name)

        Raises:
            ConfigurationError: If an option is not an accepted raw form
        """
        super().__init__(app)
        self.options = init_options(header_unit=header_unit, enabled=enabled)
        self.logger = get_app_logger(name=logger_name or __name__)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        logger = self.logger.bind(method=request.method, path=request.url.path)

        try:
            timer, token = begin_request(self.options)
        except ConfigurationError as e:
            logger.error("Server timing configuration could not be resolved", error=str(e))
            raise

        try:
            response = await call_next(request)
        finally:
            end_request(token)

        # Pre-response hook: runs once, before the response goes back to the server
        response = timer.attach_timings(response)

        if timer.enabled:
            logger.debug(
                "Server-Timing attached",
                entries=len(timer.entries),
                header_unit=timer.config.header_unit.value,
            )
        return response


__all__ = ["ServerTimingMiddleware"]
