"""Export command."""

import datetime as dt
from typing import Optional

import click

from timekeeper.cli.commands.common import (
    build_service,
    load_settings,
    report_range_options,
)
from timekeeper.cli.error_handlers import ProcessingError, with_error_handling
from timekeeper.cli.utils.formatters import format_info, format_success, format_warning
from timekeeper.writers.report_document_writer import (
    SUPPORTED_FORMATS,
    ReportDocumentWriter,
)
from timekeeper.writers.report_table_generator import ReportTableGenerator


@click.command(name="export")
@report_range_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice(SUPPORTED_FORMATS, case_sensitive=False),
    default="xlsx",
    show_default=True,
    help="Document format",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: a dated file in REPORT_OUTPUT_DIR)",
)
@click.pass_context
def export(
    ctx: click.Context,
    start_date: dt.date,
    end_date: dt.date,
    employee_id: Optional[str],
    source: Optional[str],
    fmt: str,
    output: Optional[str],
):
    """Export the report of a date range as an xlsx, csv or html document.

    Example:
        timekeeper export --start 2025-11 --end 2025-11 --format html
        timekeeper export --start 2025-11-01 --end 2025-11-30 --output nov.xlsx
    """
    with with_error_handling(ctx.obj.get("debug", False)):
        config = load_settings()
        service = build_service(config, source)
        result = service.build_reports(start_date, end_date, employee_id)

        if result.is_empty():
            click.echo(format_info("No time entries found for this period."))

        tables = ReportTableGenerator.from_config(result, config).generate()
        writer = ReportDocumentWriter.from_config(config)
        try:
            path = writer.write(tables, result.date_range, fmt, output_path=output)
        except OSError as e:
            raise ProcessingError(f"Could not write report: {e}")

        if result.skipped:
            click.echo(format_warning(f"{result.skipped} entries were skipped"))
        click.echo(format_success(f"Report written to {path}"))
