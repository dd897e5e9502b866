# server_timing/timing/header.py
"""
Server-Timing header rendering.

    Server-Timing: db;dur=12.5, cache;desc="Redis lookup";dur=0.3
"""
from typing import Iterable
from server_timing.config.config_types import TimeUnit
from .timing_entry import TimingEntry
from .units import convert_duration, format_duration

SERVER_TIMING_HEADER = "Server-Timing"


def _quote(description: str) -> str:
    escaped = description.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_timing_entry(entry: TimingEntry, header_unit: TimeUnit) -> str:
    duration = format_duration(
        convert_duration(entry.duration, entry.unit, header_unit)
    )
    if entry.description is None:
        return f"{entry.name};dur={duration}"
    return f"{entry.name};desc={_quote(entry.description)};dur={duration}"


def format_server_timing(entries: Iterable[TimingEntry], header_unit: TimeUnit) -> str:
    """Join entries, in the given order, into one header value."""
    return ", ".join(format_timing_entry(entry, header_unit) for entry in entries)


__all__ = ["SERVER_TIMING_HEADER", "format_timing_entry", "format_server_timing"]
