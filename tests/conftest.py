import logging
import os
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


# Environment read by main.py's initialize_config(); must be set before import
os.environ["APP_TITLE"] = "Server Timing Test"
os.environ["APP_VERSION"] = "0.1.0"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SERVER_TIMING_HEADER_UNIT"] = "millisecond"
os.environ["SERVER_TIMING_ENABLED"] = "true"


from server_timing import ServerTimingMiddleware, TimeUnit
from server_timing.config import clear_store, configure_structlog, set_store_value

configure_structlog(logging.WARNING)


@pytest.fixture(autouse=True)
def config_store() -> Generator[None, None, None]:
    # Every test starts from the same store values
    clear_store()
    set_store_value("header_unit", TimeUnit.MILLISECOND)
    set_store_value("enabled", True)
    yield
    clear_store()


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Build an app whose single route runs ``handler`` inside the request."""

    def _make(handler: Callable[[], None], **middleware_options) -> TestClient:
        app = FastAPI()
        app.add_middleware(ServerTimingMiddleware, **middleware_options)

        @app.get("/")
        async def index():
            handler()
            return {"status": "ok"}

        return TestClient(app)

    return _make
