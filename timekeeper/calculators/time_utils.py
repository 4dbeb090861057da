"""Time calculation utilities for the time-accounting engine.

This module provides low-level utilities for time calculations including:
- Converting time-of-day to minutes since midnight
- Shift duration with the 24h wrap for shifts crossing midnight
- Canonicalizing extra-hours input (decimal hours or "HH:MM") to decimal hours
- Rounding hours and money to 2 decimal places

These utilities are timezone-agnostic: they only look at wall-clock
time-of-day.
"""

import datetime as dt
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union

MINUTES_PER_DAY = 24 * 60

TWO_PLACES = Decimal("0.01")

_CLOCK_PATTERN = re.compile(r"^(\d{1,3}):(\d{1,2})$")


@dataclass(frozen=True)
class DecimalHours:
    """Extra time already expressed as decimal hours."""

    value: Decimal

    def to_decimal_hours(self) -> Decimal:
        return self.value


@dataclass(frozen=True)
class ClockDuration:
    """Extra time expressed as hours and minutes ("HH:MM")."""

    hours: int
    minutes: int

    def to_decimal_hours(self) -> Decimal:
        return Decimal(self.hours) + Decimal(self.minutes) / Decimal(60)


ExtraDuration = Union[DecimalHours, ClockDuration]


def convert_time_to_minutes(time: Union[dt.time, dt.datetime]) -> int:
    """Convert a time-of-day to minutes since midnight.

    Args:
        time: The time (or datetime, whose time-of-day is used)

    Returns:
        Number of minutes since midnight (0-1439)

    Example:
        >>> convert_time_to_minutes(dt.time(9, 30))
        570
        >>> convert_time_to_minutes(dt.datetime(2025, 11, 3, 23, 59))
        1439
    """
    return time.hour * 60 + time.minute


def calculate_shift_minutes(
    entry: Union[dt.time, dt.datetime], exit: Union[dt.time, dt.datetime]
) -> int:
    """Calculate shift length in minutes from entry and exit time-of-day.

    The calendar date is ignored on purpose. When the exit time-of-day is
    not later than the entry time-of-day the shift is taken to have crossed
    midnight and 24 hours are added.

    Args:
        entry: Clock-in time
        exit: Clock-out time

    Returns:
        Shift duration in minutes (1-1440)

    Example:
        >>> calculate_shift_minutes(dt.time(9, 0), dt.time(17, 30))
        510
        >>> calculate_shift_minutes(dt.time(22, 0), dt.time(2, 0))
        240
    """
    entry_minutes = convert_time_to_minutes(entry)
    exit_minutes = convert_time_to_minutes(exit)

    if exit_minutes > entry_minutes:
        return exit_minutes - entry_minutes
    # e.g., 22:00 (1320) to 02:00 (120) = (1440 - 1320) + 120 = 240
    return MINUTES_PER_DAY - entry_minutes + exit_minutes


def minutes_to_decimal_hours(minutes: int) -> Decimal:
    """Convert minutes to decimal hours at full precision.

    Example:
        >>> minutes_to_decimal_hours(90)
        Decimal('1.5')
    """
    return Decimal(minutes) / Decimal(60)


def parse_extra_duration(value: Any) -> Optional[ExtraDuration]:
    """Canonicalize extra-hours input into the ExtraDuration union.

    Accepts numbers (decimal hours), numeric strings ("2.25", "2,25") and
    clock strings ("1:30", "01:30"). Minutes must be in 0..59 and the
    resulting duration must not be negative.

    Args:
        value: Raw extra-hours value as received

    Returns:
        DecimalHours or ClockDuration, or None if the value is missing or
        cannot be read as a duration. Never raises.

    Example:
        >>> parse_extra_duration("01:30")
        ClockDuration(hours=1, minutes=30)
        >>> parse_extra_duration(2.25)
        DecimalHours(value=Decimal('2.25'))
        >>> parse_extra_duration("1:75") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        decimal_value = _to_decimal(value)
        if decimal_value is None or decimal_value < 0:
            return None
        return DecimalHours(decimal_value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _CLOCK_PATTERN.match(text)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if minutes > 59:
            return None
        return ClockDuration(hours=hours, minutes=minutes)

    decimal_value = _to_decimal(text.replace(",", "."))
    if decimal_value is None or decimal_value < 0:
        return None
    return DecimalHours(decimal_value)


def extra_duration_to_hours(value: Any) -> Decimal:
    """Canonicalize extra-hours input straight to decimal hours.

    Missing or malformed input yields Decimal("0").

    Example:
        >>> extra_duration_to_hours("00:45")
        Decimal('0.75')
        >>> extra_duration_to_hours("not a time")
        Decimal('0')
    """
    duration = parse_extra_duration(value)
    if duration is None:
        return Decimal("0")
    return duration.to_decimal_hours()


def safe_decimal(value: Any) -> Decimal:
    """Convert a numeric value to Decimal, mapping None/NaN/garbage to 0.

    Example:
        >>> safe_decimal(float("nan"))
        Decimal('0')
        >>> safe_decimal("12.5")
        Decimal('12.5')
    """
    result = _to_decimal(value)
    return Decimal("0") if result is None else result


def round_hours(hours: Decimal) -> Decimal:
    """Round hours to 2 decimal places (ROUND_HALF_UP).

    Example:
        >>> round_hours(Decimal("8.3333333"))
        Decimal('8.33')
    """
    return safe_decimal(hours).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round_currency(amount: Decimal) -> Decimal:
    """Round a monetary amount to 2 decimal places (ROUND_HALF_UP).

    Example:
        >>> round_currency(Decimal("130"))
        Decimal('130.00')
    """
    return safe_decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not result.is_finite():
        return None
    return result
