"""Timekeeper CLI.

This module provides a command-line interface for the time-accounting
engine: summaries and document exports for a date range, and previewing
and submitting individual time entries.
"""

import click
from dotenv import load_dotenv

from timekeeper import __version__
from timekeeper.cli.commands.export import export
from timekeeper.cli.commands.preview import preview
from timekeeper.cli.commands.submit import submit
from timekeeper.cli.commands.summary import summary
from timekeeper.config.logging_config import LoggingConfig, configure_logging


@click.group(help="Timekeeper CLI - Employee hours and pay reports")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Timekeeper CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


# Register commands
cli.add_command(summary)
cli.add_command(export)
cli.add_command(preview)
cli.add_command(submit)


def main():
    """Main entry point for the CLI."""
    load_dotenv()
    configure_logging(LoggingConfig.from_env(default_level="WARNING"))
    cli()


if __name__ == "__main__":
    main()
