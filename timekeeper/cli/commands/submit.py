"""Submit command."""

import datetime as dt
from decimal import Decimal
from typing import Optional

import click

from timekeeper.calculators.time_utils import parse_extra_duration
from timekeeper.cli.commands.common import build_service, load_settings
from timekeeper.cli.commands.preview import render_preview
from timekeeper.cli.error_handlers import with_error_handling
from timekeeper.cli.utils.formatters import format_success, format_warning
from timekeeper.cli.utils.parsing import (
    amount_option,
    clock_time_option,
    start_date_option,
)
from timekeeper.models.time_entry import TimeEntryDraft


@click.command(name="submit")
@click.option("--employee", "employee_id", required=True, help="Employee id")
@click.option(
    "--date",
    "entry_date",
    required=True,
    callback=start_date_option,
    help="Day of the shift (YYYY-MM-DD)",
)
@click.option(
    "--entry",
    "entry_time",
    required=True,
    callback=clock_time_option,
    help="Clock-in (HH:MM)",
)
@click.option(
    "--exit",
    "exit_time",
    default=None,
    callback=clock_time_option,
    help="Clock-out (HH:MM)",
)
@click.option(
    "--daily-rate", required=True, callback=amount_option, help="Pay for the shift"
)
@click.option(
    "--extra", "extra_hours", default=None, help="Extra time, HH:MM or decimal hours"
)
@click.option(
    "--extra-rate", default="0", callback=amount_option, help="Pay per extra hour"
)
@click.option("--notes", default=None, help="Free-text notes")
@click.option(
    "--entry-id", default=None, help="Update this entry instead of creating one"
)
@click.option(
    "--source",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file of time entries (default: configured API or data file)",
)
@click.pass_context
def submit(
    ctx: click.Context,
    employee_id: str,
    entry_date: dt.date,
    entry_time: dt.time,
    exit_time: Optional[dt.time],
    daily_rate: Decimal,
    extra_hours: Optional[str],
    extra_rate: Decimal,
    notes: Optional[str],
    entry_id: Optional[str],
    source: Optional[str],
):
    """Create or update a time entry in the store.

    The totals are previewed locally; the store keeps the submitted values.

    Example:
        timekeeper submit --employee emp-1 --date 2025-11-03 \
            --entry 09:00 --exit 17:00 --daily-rate 150
    """
    with with_error_handling(ctx.obj.get("debug", False)):
        config = load_settings()
        draft = TimeEntryDraft(
            employee_id=employee_id,
            date=entry_date,
            entry_time=entry_time,
            exit_time=exit_time,
            daily_rate=daily_rate,
            extra_hours=extra_hours,
            extra_rate=extra_rate,
            notes=notes,
        )

        service = build_service(config, source)
        preview, stored = service.submit_entry(draft, entry_id=entry_id)

        click.echo(render_preview(preview, config))
        if extra_hours and parse_extra_duration(extra_hours) is None:
            click.echo(
                format_warning(
                    f"Extra time {extra_hours!r} was not understood and counts as 00:00"
                )
            )

        stored_id = stored.get("_id", stored.get("id", entry_id))
        action = "Updated" if entry_id else "Created"
        click.echo(format_success(f"{action} time entry {stored_id}"))
