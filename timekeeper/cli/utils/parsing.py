"""Click callbacks for dates, clock times and amounts."""

import datetime as dt
from calendar import monthrange
from decimal import Decimal, InvalidOperation
from typing import Optional

import click


def parse_date_input(date_str: str, end_of_month: bool = False) -> dt.date:
    """Parse a date in YYYY-MM-DD or YYYY-MM format.

    A bare month means its first day, or its last day with ``end_of_month``.

    Raises:
        ValueError: If the format is invalid
    """
    try:
        return dt.datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        pass

    try:
        parsed = dt.datetime.strptime(date_str, "%Y-%m")
    except ValueError:
        raise ValueError(
            f"Invalid date format: {date_str}. Expected YYYY-MM-DD or YYYY-MM"
        )
    day = monthrange(parsed.year, parsed.month)[1] if end_of_month else 1
    return dt.date(parsed.year, parsed.month, day)


def start_date_option(ctx, param, value: Optional[str]) -> Optional[dt.date]:
    if value is None:
        return None
    try:
        return parse_date_input(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def end_date_option(ctx, param, value: Optional[str]) -> Optional[dt.date]:
    if value is None:
        return None
    try:
        return parse_date_input(value, end_of_month=True)
    except ValueError as e:
        raise click.BadParameter(str(e))


def clock_time_option(ctx, param, value: Optional[str]) -> Optional[dt.time]:
    """Parse "HH:MM" into a time of day."""
    if value is None:
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise click.BadParameter(f"Invalid time: {value}. Expected HH:MM")


def amount_option(ctx, param, value: Optional[str]) -> Optional[Decimal]:
    """Parse a non-negative amount, accepting "," as decimal mark."""
    if value is None:
        return None
    try:
        amount = Decimal(value.strip().replace(",", "."))
    except InvalidOperation:
        raise click.BadParameter(f"Invalid amount: {value}")
    if not amount.is_finite() or amount < 0:
        raise click.BadParameter(f"Amount must be a non-negative number: {value}")
    return amount
