# server_timing/timing/timing_entry.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union
from server_timing.config.config_types import TimeUnit

Duration = Union[int, float, Decimal]


@dataclass(frozen=True)
class TimingEntry:
    """
    One measured event of a request.

    Names should be unique per request but this is not checked; duplicates
    are rendered as separate metrics.
    """

    name: str
    duration: Duration
    unit: TimeUnit = TimeUnit.NATIVE
    description: Optional[str] = None


__all__ = ["Duration", "TimingEntry"]
