"""Summary command."""

import datetime as dt
from typing import Optional

import click

from timekeeper.cli.commands.common import (
    build_service,
    load_settings,
    report_range_options,
)
from timekeeper.cli.error_handlers import with_error_handling
from timekeeper.cli.utils.formatters import (
    format_info,
    format_issues,
    format_success,
    format_table,
    format_warning,
)
from timekeeper.utils.formatting import format_date
from timekeeper.writers.report_table_generator import ReportTableGenerator


@click.command(name="summary")
@report_range_options
@click.option("--details", is_flag=True, help="List every entry under its employee")
@click.pass_context
def summary(
    ctx: click.Context,
    start_date: dt.date,
    end_date: dt.date,
    employee_id: Optional[str],
    source: Optional[str],
    details: bool,
):
    """Show per-employee hours and pay for a date range.

    Example:
        timekeeper summary --start 2025-11 --end 2025-11
        timekeeper summary --start 2025-11-01 --end 2025-11-15 \
            --employee emp-1 --details
    """
    with with_error_handling(ctx.obj.get("debug", False)):
        config = load_settings()
        service = build_service(config, source)
        result = service.build_reports(start_date, end_date, employee_id)

        period = (
            f"{format_date(result.date_range.start, config.date_format)} to "
            f"{format_date(result.date_range.end, config.date_format)}"
        )
        click.echo(format_info(f"Time entries from {period}"))
        if employee_id:
            click.echo(format_info(f"  Filter: Employee = {employee_id}"))
        click.echo()

        if result.is_empty():
            click.echo(format_info("No time entries found for this period."))
        else:
            tables = ReportTableGenerator.from_config(result, config).generate()
            if details:
                click.echo(
                    format_table(
                        list(tables.details.columns), tables.details.values.tolist()
                    )
                )
                click.echo()
            click.echo(
                format_table(
                    list(tables.summary.columns), tables.summary.values.tolist()
                )
            )
            click.echo()
            click.echo(
                format_success(
                    f"{len(result.reports)} employee(s), "
                    f"{result.grand_totals.days_worked} entries"
                )
            )

        if len(result.warnings):
            click.echo()
            click.echo(format_warning(f"Data issues: {result.warnings.summary()}"))
            for line in format_issues(result.warnings):
                click.echo(f"  {line}")
