# server_timing/timing/units.py
"""
Exact time unit conversion for header values.

Durations go through ``Decimal`` so 550 ms renders as ``0.55`` seconds rather
than ``0.5500000000000002``.
"""
from decimal import Decimal
from server_timing.config.config_types import TimeUnit
from .timing_entry import Duration


def _to_decimal(value: Duration) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr of a float instead of its binary expansion
    return Decimal(str(value))


def convert_duration(duration: Duration, from_unit: TimeUnit, to_unit: TimeUnit) -> Decimal:
    """
    Convert ``duration`` between units.

    Examples:
        >>> convert_duration(550, TimeUnit.MILLISECOND, TimeUnit.SECOND)
        Decimal('0.55')
        >>> convert_duration(3, TimeUnit.SECOND, TimeUnit.MILLISECOND)
        Decimal('3000')
    """
    value = _to_decimal(duration)
    if from_unit is to_unit:
        return value
    return value * Decimal(to_unit.per_second) / Decimal(from_unit.per_second)


def format_duration(value: Decimal) -> str:
    """Render as a plain decimal: no exponent, no trailing zeros."""
    if value.is_zero():
        return "0"
    return format(value.normalize(), "f")


__all__ = ["convert_duration", "format_duration"]
