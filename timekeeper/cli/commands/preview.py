"""Preview command."""

import datetime as dt
from decimal import Decimal
from typing import Optional

import click

from timekeeper.calculators.normalizer import EntryPreview, preview_totals
from timekeeper.cli.commands.common import load_settings
from timekeeper.cli.error_handlers import with_error_handling
from timekeeper.cli.utils.formatters import format_info, format_key_values
from timekeeper.cli.utils.parsing import (
    amount_option,
    clock_time_option,
    start_date_option,
)
from timekeeper.config.settings import TimekeeperConfig
from timekeeper.models.time_entry import TimeEntryDraft
from timekeeper.utils.formatting import format_currency, format_decimal


def render_preview(preview: EntryPreview, config: TimekeeperConfig) -> str:
    """Key/value lines for a previewed entry."""
    return format_key_values(
        [
            ("Worked hours", format_decimal(preview.worked_hours)),
            (
                "Extra hours",
                f"{preview.extra_hours_formatted} "
                f"({format_decimal(preview.extra_hours)})",
            ),
            ("Total hours", format_decimal(preview.total_hours)),
            (
                "Total pay",
                format_currency(
                    preview.total_pay,
                    symbol=config.currency_symbol,
                    decimal_separator=config.decimal_separator,
                    thousands_separator=config.thousands_separator,
                ),
            ),
        ]
    )


@click.command(name="preview")
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
    help="Clock-out (HH:MM), omit for an open shift",
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
@click.option(
    "--date",
    "entry_date",
    default=None,
    callback=start_date_option,
    help="Day of the shift (default: today)",
)
@click.pass_context
def preview(
    ctx: click.Context,
    entry_time: dt.time,
    exit_time: Optional[dt.time],
    daily_rate: Decimal,
    extra_hours: Optional[str],
    extra_rate: Decimal,
    entry_date: Optional[dt.date],
):
    """Compute hours and pay for an entry without saving it.

    Example:
        timekeeper preview --entry 09:00 --exit 17:30 --daily-rate 100 \
            --extra 01:30 --extra-rate 20
    """
    with with_error_handling(ctx.obj.get("debug", False)):
        config = load_settings()
        draft = TimeEntryDraft(
            employee_id="preview",
            date=entry_date or dt.date.today(),
            entry_time=entry_time,
            exit_time=exit_time,
            daily_rate=daily_rate,
            extra_hours=extra_hours,
            extra_rate=extra_rate,
        )
        result = preview_totals(draft)

        if exit_time is None:
            click.echo(
                format_info("Open shift: worked hours count once a clock-out is set")
            )
        click.echo(render_preview(result, config))
