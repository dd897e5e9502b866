# main.py
import asyncio
import sys
from datetime import datetime
from fastapi import FastAPI
from pydantic import BaseModel, Field
from dotenv import load_dotenv
from server_timing import (
    FROM_CONFIG,
    ConfigurationError,
    ServerTimingMiddleware,
    capture_timing,
    timing,
)
from server_timing.config import initialize_config, get_config, is_configured
from server_timing.logger import get_app_logger

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    sys.exit(1)

config = get_config()
logger = get_app_logger(name=__name__)

app = FastAPI(
    title=config.app_title,
    version=config.app_version,
    description=f"Running in {config.environment} environment",
)
# Unit and toggle come from SERVER_TIMING_* via the config store
app.add_middleware(
    ServerTimingMiddleware,
    header_unit=FROM_CONFIG,
    enabled=FROM_CONFIG,
)


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Current system health status")
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    logging_configured: bool = Field(..., description="Logging configuration status")
    server_timing_enabled: bool = Field(..., description="Server-Timing header toggle")


class SlowResponse(BaseModel):
    steps: list[str] = Field(..., description="Timed steps in execution order")


@app.get("/health", response_model=HealthCheckResponse)
async def check_health() -> HealthCheckResponse:
    with timing("health", "Health check"):
        logger.info("Health check passed", version=config.app_version, endpoint="/health")
        return HealthCheckResponse(
            status="Healthy",
            timestamp=datetime.now(),
            version=config.app_version,
            logging_configured=is_configured(),
            server_timing_enabled=config.server_timing.enabled,
        )


@app.get("/slow", response_model=SlowResponse)
async def slow(delay_ms: int = 20) -> SlowResponse:
    """Sleep through two steps so the header has something to show."""
    with timing("fetch", "Simulated fetch"):
        await asyncio.sleep(delay_ms / 1000)

    capture_timing("render", (delay_ms / 4, "millisecond"), "Simulated render")
    return SlowResponse(steps=["fetch", "render"])


__all__ = ["app", "config"]
