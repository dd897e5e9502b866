# server_timing/timing/__init__.py
from .timing_entry import Duration, TimingEntry
from .units import convert_duration, format_duration
from .header import SERVER_TIMING_HEADER, format_server_timing, format_timing_entry
from .collector import (
    RequestTimer,
    attach_timings,
    begin_request,
    capture_timing,
    current_timer,
    end_request,
    timing,
)

__all__ = [
    "Duration",
    "TimingEntry",
    "convert_duration",
    "format_duration",
    "SERVER_TIMING_HEADER",
    "format_server_timing",
    "format_timing_entry",
    "RequestTimer",
    "attach_timings",
    "begin_request",
    "capture_timing",
    "current_timer",
    "end_request",
    "timing",
]
