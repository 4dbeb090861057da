"""Readers for converting store records into engine models."""

from timekeeper.readers.date_values import (
    CalendarDate,
    DateValue,
    Instant,
    canonicalize_identifier,
    parse_calendar_date,
    parse_date_value,
    parse_instant,
    to_calendar_date,
)
from timekeeper.readers.time_entry_reader import TimeEntryReader

__all__ = [
    "CalendarDate",
    "DateValue",
    "Instant",
    "TimeEntryReader",
    "canonicalize_identifier",
    "parse_calendar_date",
    "parse_date_value",
    "parse_instant",
    "to_calendar_date",
]
