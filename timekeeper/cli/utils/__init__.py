"""CLI utility functions."""

from timekeeper.cli.utils.formatters import (
    format_error,
    format_info,
    format_issues,
    format_key_values,
    format_success,
    format_table,
    format_warning,
)
from timekeeper.cli.utils.parsing import (
    amount_option,
    clock_time_option,
    end_date_option,
    parse_date_input,
    start_date_option,
)

__all__ = [
    "amount_option",
    "clock_time_option",
    "end_date_option",
    "format_error",
    "format_info",
    "format_issues",
    "format_key_values",
    "format_success",
    "format_table",
    "format_warning",
    "parse_date_input",
    "start_date_option",
]
