"""Options and setup shared by the report commands."""

from typing import Optional

import click
from pydantic import ValidationError

from timekeeper.cli.error_handlers import ConfigurationError
from timekeeper.cli.utils.parsing import end_date_option, start_date_option
from timekeeper.config.settings import TimekeeperConfig, get_config
from timekeeper.services.entry_cache import EntryCache
from timekeeper.services.report_service import ReportService
from timekeeper.services.time_entry_store import create_store


def load_settings() -> TimekeeperConfig:
    """Load settings, reporting invalid values as a ConfigurationError."""
    try:
        return get_config()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid settings: {problems}",
            recovery_hint="Check your environment variables and .env file",
        )


def build_service(config: TimekeeperConfig, source: Optional[str]) -> ReportService:
    """Report service over the store chosen by ``source`` and the settings."""
    return ReportService(create_store(config, source), cache=EntryCache())


_RANGE_OPTIONS = [
    click.option(
        "--start",
        "start_date",
        required=True,
        callback=start_date_option,
        help="First day (YYYY-MM-DD, or YYYY-MM for the first of the month)",
    ),
    click.option(
        "--end",
        "end_date",
        required=True,
        callback=end_date_option,
        help="Last day (YYYY-MM-DD, or YYYY-MM for the last of the month)",
    ),
    click.option(
        "--employee",
        "employee_id",
        type=str,
        default=None,
        help="Only include this employee id (optional)",
    ),
    click.option(
        "--source",
        type=click.Path(dir_okay=False),
        default=None,
        help="JSON file of time entries (default: configured API or data file)",
    ),
]


def report_range_options(func):
    """Add --start, --end, --employee and --source to a command."""
    for option in reversed(_RANGE_OPTIONS):
        func = option(func)
    return func
