"""Canonicalization of loosely typed dates and identifiers.

The time-entry store hands out dates as ISO strings, wrapped objects
({"$date": ...}), epoch milliseconds or native date/datetime values, and
identifiers as strings, {"$oid": ...} objects, byte buffers or nested
{"_id": ...} references. Everything is converted here, once, so the rest
of the engine only ever sees ``dt.date``, ``dt.datetime`` and ``str``.
"""

import datetime as dt
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

_DATE_FORMATS = ["%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y"]


@dataclass(frozen=True)
class CalendarDate:
    """A day without time-of-day."""

    value: dt.date


@dataclass(frozen=True)
class Instant:
    """A point in time with time-of-day."""

    value: dt.datetime


DateValue = Union[CalendarDate, Instant]


def parse_date_value(raw: Any) -> DateValue:
    """Convert any supported date representation into a DateValue.

    Args:
        raw: str, date, datetime, epoch milliseconds, or {"$date": ...}

    Returns:
        CalendarDate for plain days, Instant for timestamps

    Raises:
        ValueError: If the value cannot be read as a date

    Example:
        >>> parse_date_value("2025-11-03")
        CalendarDate(value=datetime.date(2025, 11, 3))
        >>> parse_date_value("2025-11-03T09:00:00.000Z").value.hour
        9
    """
    if isinstance(raw, dt.datetime):
        return Instant(raw)
    if isinstance(raw, dt.date):
        return CalendarDate(raw)
    if isinstance(raw, Mapping) and "$date" in raw:
        return parse_date_value(raw["$date"])
    if isinstance(raw, bool):
        raise ValueError(f"Unsupported date value: {raw!r}")
    if isinstance(raw, (int, float)):
        # Epoch milliseconds
        try:
            return Instant(dt.datetime.fromtimestamp(raw / 1000, tz=dt.timezone.utc))
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Invalid epoch timestamp: {raw!r}") from e
    if not isinstance(raw, str):
        raise ValueError(f"Unsupported date value: {raw!r}")

    text = raw.strip()
    if not text:
        raise ValueError("Empty date value")

    for fmt in _DATE_FORMATS:
        try:
            return CalendarDate(dt.datetime.strptime(text, fmt).date())
        except ValueError:
            continue

    try:
        # fromisoformat rejects a trailing Z on older interpreters
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return Instant(dt.datetime.fromisoformat(text))
    except ValueError as e:
        raise ValueError(f"Unparsable date: {raw!r}") from e


def to_calendar_date(value: DateValue) -> dt.date:
    """Return the calendar day of a DateValue.

    Instants keep the day of their own wall clock; no timezone conversion
    is applied, so "2025-11-03T00:00:00.000Z" is 3 November everywhere.
    """
    if isinstance(value, Instant):
        return value.value.date()
    return value.value


def parse_calendar_date(raw: Any) -> dt.date:
    """Shortcut for ``to_calendar_date(parse_date_value(raw))``."""
    return to_calendar_date(parse_date_value(raw))


def parse_instant(raw: Any, on_date: Optional[dt.date] = None) -> dt.datetime:
    """Read a clock-in/clock-out value as a datetime.

    Plain "HH:MM" strings and ``dt.time`` values are placed on ``on_date``.

    Raises:
        ValueError: If the value has no time-of-day or cannot be parsed

    Example:
        >>> parse_instant("17:30", on_date=dt.date(2025, 11, 3))
        datetime.datetime(2025, 11, 3, 17, 30)
    """
    if isinstance(raw, dt.time):
        if on_date is None:
            raise ValueError("A time-of-day needs a date")
        return dt.datetime.combine(on_date, raw)

    if isinstance(raw, str):
        match = _CLOCK_TIME.match(raw.strip())
        if match:
            if on_date is None:
                raise ValueError(f"Time-of-day {raw!r} needs a date")
            hour, minute = int(match.group(1)), int(match.group(2))
            second = int(match.group(3) or 0)
            return dt.datetime.combine(on_date, dt.time(hour, minute, second))

    value = parse_date_value(raw)
    if isinstance(value, CalendarDate):
        raise ValueError(f"Value {raw!r} has no time-of-day")
    return value.value


def canonicalize_identifier(raw: Any) -> Optional[str]:
    """Convert any supported identifier representation to a string.

    Example:
        >>> canonicalize_identifier({"$oid": "65f0c0ffee"})
        '65f0c0ffee'
        >>> canonicalize_identifier({"buffer": {"0": 101, "1": 2}})
        '6502'
        >>> canonicalize_identifier("   ") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        return raw.strip() or None
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, Mapping):
        if "$oid" in raw:
            return canonicalize_identifier(raw["$oid"])
        if "buffer" in raw and isinstance(raw["buffer"], Mapping):
            buffer = raw["buffer"]
            try:
                ordered = sorted(buffer.items(), key=lambda item: int(item[0]))
                return "".join(f"{int(b):02x}" for _, b in ordered) or None
            except (TypeError, ValueError):
                return None
        for key in ("_id", "id"):
            if key in raw:
                return canonicalize_identifier(raw[key])
    return None
