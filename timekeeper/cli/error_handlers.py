"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from timekeeper.cli.utils.formatters import format_error, format_warning
from timekeeper.services.time_entry_store import StoreError
from timekeeper.validators.errors import DateRangeError, EntryValidationError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Settings are missing or invalid."""


class StoreAccessError(CLIError):
    """The time-entry store could not be read or written."""


class DataValidationError(CLIError):
    """Input dates, times, amounts or entries are invalid."""


class ProcessingError(CLIError):
    """Aggregating or exporting failed."""


EXIT_CODES = {
    ConfigurationError: 1,
    StoreAccessError: 2,
    DataValidationError: 3,
    ProcessingError: 4,
}

_LABELS = {
    ConfigurationError: "Configuration Error",
    StoreAccessError: "Store Error",
    DataValidationError: "Data Validation Error",
    ProcessingError: "Processing Error",
}


def translate_error(error: Exception) -> Exception:
    """Map engine and library exceptions onto CLI errors.

    Exceptions without a mapping are returned unchanged.
    """
    if isinstance(error, CLIError):
        return error
    if isinstance(error, StoreError):
        hint = None
        if error.status_code in (401, 403):
            hint = "Check TIMEKEEPER_API_TOKEN in your .env file"
        elif error.status_code is None:
            hint = "Check --source, TIMEKEEPER_DATA_FILE or TIMEKEEPER_API_URL"
        return StoreAccessError(str(error), hint)
    if isinstance(error, DateRangeError):
        return DataValidationError(
            str(error), "Use a start date on or before the end date"
        )
    if isinstance(error, EntryValidationError):
        return DataValidationError(str(error))
    if isinstance(error, ValidationError):
        return DataValidationError(_describe_validation_error(error))
    return error


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(p) for p in detail.get("loc", ())) or "value"
        parts.append(f"{location}: {detail.get('msg')}")
    return "; ".join(parts)


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Print a user-friendly message for ``error`` and pick an exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace for unexpected errors

    Returns:
        Exit code (1-4 for known error types, 130 on abort, 255 otherwise)
    """
    error = translate_error(error)

    for error_type, exit_code in EXIT_CODES.items():
        if isinstance(error, error_type):
            label = _LABELS[error_type]
            click.echo(format_error(f"{label}: {error.message}"), err=True)
            if error.recovery_hint:
                click.echo(format_warning(f"Hint: {error.recovery_hint}"), err=True)
            return exit_code

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
    click.echo(str(error), err=True)
    if debug:
        click.echo("\nFull stack trace:", err=True)
        click.echo(
            "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
            err=True,
        )
    else:
        click.echo(
            format_warning("\nRun with --debug for the full stack trace"), err=True
        )
    return 255


class _ErrorHandler:
    """Context manager that turns exceptions into messages and exit codes."""

    def __init__(self, debug: bool):
        self.debug = debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is None or isinstance(exc_val, (click.exceptions.Exit, SystemExit)):
            return False
        if isinstance(exc_val, click.UsageError):
            return False
        sys.exit(handle_cli_error(exc_val, self.debug))


def with_error_handling(debug: bool = False) -> _ErrorHandler:
    """
    Wrap a command body so failures exit with a message and an exit code.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj.get("debug", False)):
                ...
    """
    return _ErrorHandler(debug)
