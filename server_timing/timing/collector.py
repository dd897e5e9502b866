# server_timing/timing/collector.py
"""
Request-scoped timing collection.

The middleware opens a ``RequestTimer`` per request with ``begin_request`` and
stores it in ``server_timing_context_var``. Application code anywhere below
the middleware records into it:

    from server_timing import capture_timing, timing

    capture_timing("db", (12.5, "millisecond"), "Primary DB")

    with timing("render"):
        body = render(result)

Calls made while no timer is active, or while the timer is disabled, do
nothing, so instrumentation can stay in code paths that run without the
middleware.
"""

import math
import numbers
import threading
import time
from contextlib import contextmanager
from contextvars import Token
from decimal import Decimal
from fractions import Fraction
from typing import Iterator, List, Optional, Tuple, TypeVar, Union

from server_timing.config.config_types import TimeUnit
from server_timing.config.timing_config import (
    ResolvedTimingConfig,
    ServerTimingOptions,
    resolve_config,
)
from server_timing.context_vars import server_timing_context_var
from server_timing.logger import get_app_logger
from .header import SERVER_TIMING_HEADER, format_server_timing
from .timing_entry import Duration, TimingEntry

logger = get_app_logger(__name__)

ResponseT = TypeVar("ResponseT")
DurationArg = Union[Duration, Tuple[Duration, Union[TimeUnit, str]]]


class RequestTimer:
    """
    Resolved configuration plus the ordered entries of one request.

    Appends are guarded by a per-request lock because sync endpoints run in a
    thread pool and may record from several threads at once.
    """

    def __init__(self, config: ResolvedTimingConfig) -> None:
        self.config = config
        self._entries: List[TimingEntry] = []
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def entries(self) -> List[TimingEntry]:
        """Snapshot of the recorded entries in call order."""
        with self._lock:
            return list(self._entries)

    def record(self, entry: TimingEntry) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._entries.append(entry)

    @contextmanager
    def capture(self, name: str, description: Optional[str] = None) -> Iterator[None]:
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            elapsed = time.perf_counter_ns() - start
            self.record(TimingEntry(name, elapsed, TimeUnit.NATIVE, description))

    def format_server_timing(self) -> str:
        # Formats into: db;dur=10.5, cache;desc="Redis";dur=0.2
        return format_server_timing(self.entries, self.config.header_unit)

    def attach_timings(self, response: ResponseT) -> ResponseT:
        """
        Set the Server-Timing header on ``response``.

        Runs once, right before the response is returned to the server.
        A disabled timer leaves the response untouched.
        """
        if not self.enabled:
            return response

        response.headers[SERVER_TIMING_HEADER] = self.format_server_timing()  # type: ignore[attr-defined]
        return response


def begin_request(options: ServerTimingOptions) -> Tuple[RequestTimer, Token]:
    """
    Open a fresh timer for the current request context.

    Returns:
        The timer, whose ``attach_timings`` is the pre-response callback, and
        the context token to hand to ``end_request``

    Raises:
        ConfigurationError: If the options cannot be resolved
    """
    timer = RequestTimer(resolve_config(options))
    token = server_timing_context_var.set(timer)
    return timer, token


def end_request(token: Token) -> None:
    server_timing_context_var.reset(token)


def current_timer() -> Optional[RequestTimer]:
    return server_timing_context_var.get()


def _check_duration(value: object) -> Duration:
    """
    Return ``value`` as a finite ``Duration``.

    Raises:
        ValueError: For booleans, non-numbers, NaN and infinities
    """
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Duration must be finite: {value!r}")
        return value
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"Duration must be a real number: {value!r}")
    if isinstance(value, Fraction):
        return Decimal(value.numerator) / Decimal(value.denominator)
    if isinstance(value, numbers.Integral):
        return int(value)
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Duration must be finite: {value!r}")
    return value


def _split_duration(duration: DurationArg) -> Tuple[Duration, TimeUnit]:
    if isinstance(duration, tuple):
        value, unit = duration
        return _check_duration(value), TimeUnit(unit)
    return _check_duration(duration), TimeUnit.NATIVE


def capture_timing(
    name: str, duration: DurationArg, description: Optional[str] = None
) -> bool:
    """
    Record a timing for the current request.

    Args:
        name: Metric name, ideally unique within the request
        duration: Native ticks (``time.perf_counter_ns()`` differences), or a
            ``(duration, unit)`` pair where unit is a TimeUnit or its name
        description: Optional text rendered as ``desc="..."``

    Returns:
        Always True; nothing is recorded when no timer is active or it is
        disabled, and a duration that is not a finite real number or carries
        an unknown unit is logged and discarded
    """
    timer = server_timing_context_var.get()
    if timer is None or not timer.enabled:
        return True

    try:
        value, unit = _split_duration(duration)
    except (TypeError, ValueError) as e:
        logger.warning(
            "Discarding invalid timing",
            timing_name=name,
            reason=str(e),
            duration=repr(duration),
        )
        return True

    timer.record(TimingEntry(name, value, unit, description))
    return True


@contextmanager
def timing(name: str, description: Optional[str] = None) -> Iterator[None]:
    """Time the enclosed block and record it for the current request."""
    timer = server_timing_context_var.get()
    if timer is None:
        yield
        return
    with timer.capture(name, description):
        yield


def attach_timings(response: ResponseT) -> ResponseT:
    """Attach the current request's timings, or return ``response`` unchanged."""
    timer = server_timing_context_var.get()
    if timer is None:
        return response
    return timer.attach_timings(response)


__all__ = [
    "RequestTimer",
    "begin_request",
    "end_request",
    "current_timer",
    "capture_timing",
    "timing",
    "attach_timings",
]
