import logging
from typing import Generator

import pytest
from structlog.testing import capture_logs

from server_timing.config import configure_structlog, is_configured
from server_timing.config import structlog_config
from server_timing.logger import get_app_logger


@pytest.fixture
def unconfigured_structlog() -> Generator[None, None, None]:
    structlog_config._state.reset()
    yield
    structlog_config._state.reset()
    configure_structlog(logging.WARNING)


def test_logging_before_configuration_uses_fallback(unconfigured_structlog):
    get_app_logger("early").info("early event")

    assert is_configured()
    assert structlog_config._state.is_fallback
    assert structlog_config._state.log_level == logging.INFO


def test_explicit_configuration_replaces_fallback(unconfigured_structlog):
    early = get_app_logger("early")
    early.info("early event")

    configure_structlog(logging.DEBUG)

    assert not structlog_config._state.is_fallback
    assert structlog_config._state.log_level == logging.DEBUG
    with capture_logs() as logs:
        early.debug("after configuration")
    assert [log["event"] for log in logs] == ["after configuration"]


def test_explicit_configuration_is_idempotent(unconfigured_structlog):
    configure_structlog(logging.DEBUG)
    configure_structlog(logging.DEBUG)

    assert structlog_config._state.log_level == logging.DEBUG


def test_conflicting_explicit_configuration_raises(unconfigured_structlog):
    configure_structlog(logging.DEBUG)

    with pytest.raises(RuntimeError, match="already configured"):
        configure_structlog(logging.INFO)


def test_fallback_does_not_override_explicit_configuration(unconfigured_structlog):
    configure_structlog(logging.ERROR)

    get_app_logger("late").warning("filtered")

    assert not structlog_config._state.is_fallback
    assert structlog_config._state.log_level == logging.ERROR
