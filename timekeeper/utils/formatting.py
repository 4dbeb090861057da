"""Shared display formatting for hours, times, dates and money.

Used by the normalizer (extra hours as "HH:MM"), the CLI summaries and the
document writers, so every surface shows the same representation.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from timekeeper.models.time_entry import ApprovalState

MISSING_TIME = "--:--"
MISSING_VALUE = "--"

STATUS_LABELS = {
    ApprovalState.PENDING: "Pending",
    ApprovalState.APPROVED: "Approved",
    ApprovalState.REJECTED: "Rejected",
}


def format_hours_clock(hours: Any) -> str:
    """Format decimal hours as "HH:MM".

    Minutes are rounded to the nearest whole minute before splitting, so
    1.9999 hours shows as "02:00" rather than "01:60".

    Args:
        hours: Decimal hours; None, NaN or garbage show as "00:00"

    Returns:
        Zero-padded "HH:MM" string (hours may exceed two digits)

    Example:
        >>> format_hours_clock(Decimal("1.5"))
        '01:30'
        >>> format_hours_clock(None)
        '00:00'
    """
    try:
        value = Decimal(str(hours)) if hours is not None else Decimal("0")
    except (InvalidOperation, ValueError):
        value = Decimal("0")
    if not value.is_finite() or value < 0:
        value = Decimal("0")

    total_minutes = int((value * 60).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def format_time_of_day(value: Optional[dt.datetime]) -> str:
    """Format the time-of-day of an instant as "HH:MM".

    Example:
        >>> format_time_of_day(dt.datetime(2025, 11, 3, 9, 5))
        '09:05'
        >>> format_time_of_day(None)
        '--:--'
    """
    if value is None:
        return MISSING_TIME
    return value.strftime("%H:%M")


def format_date(value: Optional[dt.date], date_format: str = "%d/%m/%Y") -> str:
    """Format a calendar day.

    Example:
        >>> format_date(dt.date(2025, 11, 3))
        '03/11/2025'
    """
    if value is None:
        return "--/--/----"
    return value.strftime(date_format)


def format_currency(
    amount: Any,
    symbol: str = "R$",
    decimal_separator: str = ",",
    thousands_separator: str = ".",
) -> str:
    """Format a monetary amount with 2 decimals and grouped thousands.

    Example:
        >>> format_currency(Decimal("1234.5"))
        'R$ 1.234,50'
        >>> format_currency(Decimal("480"), symbol="$", decimal_separator=".",
        ...                 thousands_separator=",")
        '$ 480.00'
    """
    try:
        value = Decimal(str(amount)) if amount is not None else Decimal("0")
    except (InvalidOperation, ValueError):
        value = Decimal("0")
    if not value.is_finite():
        value = Decimal("0")

    value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, fraction_part = f"{abs(value):.2f}".split(".")

    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)

    grouped = thousands_separator.join(groups)
    number = f"{sign}{grouped}{decimal_separator}{fraction_part}"
    return f"{symbol} {number}" if symbol else number


def format_decimal(value: Any, places: int = 2) -> str:
    """Format a decimal number with a fixed number of places.

    Example:
        >>> format_decimal(Decimal("8.5"))
        '8.50'
    """
    try:
        number = Decimal(str(value)) if value is not None else Decimal("0")
    except (InvalidOperation, ValueError):
        number = Decimal("0")
    if not number.is_finite():
        number = Decimal("0")
    quantum = Decimal(1).scaleb(-places)
    return str(number.quantize(quantum, rounding=ROUND_HALF_UP))


def format_status(state: Optional[ApprovalState]) -> str:
    if state is None:
        return MISSING_VALUE
    return STATUS_LABELS.get(state, str(state))
