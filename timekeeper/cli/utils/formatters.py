"""Terminal output helpers for the CLI."""

from typing import Iterable, List, Sequence, Tuple

import click

from timekeeper.validators.validation_report import ValidationReport, ValidationSeverity


def format_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    return click.style(f"ℹ {message}", fg="blue")


def format_table(
    headers: Sequence[str], rows: Iterable[Sequence[object]], max_width: int = 40
) -> str:
    """Render rows as a boxed, left-aligned text table.

    Cells longer than ``max_width`` are truncated.

    Example:
        >>> print(format_table(["Employee", "Pay"], [["Ana", "R$ 330,00"]]))
        +----------+-----------+
        | Employee | Pay       |
        +----------+-----------+
        | Ana      | R$ 330,00 |
        +----------+-----------+
    """
    if not headers:
        return ""

    cells: List[List[str]] = [
        [str(value)[:max_width] for value in row[: len(headers)]] for row in rows
    ]
    widths = [min(len(h), max_width) for h in headers]
    for row in cells:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(values: Sequence[str]) -> str:
        padded = list(values) + [""] * (len(widths) - len(values))
        return "|" + "|".join(f" {v:<{widths[i]}} " for i, v in enumerate(padded)) + "|"

    lines = [separator, line([h[:max_width] for h in headers]), separator]
    if cells:
        lines.extend(line(row) for row in cells)
        lines.append(separator)
    return "\n".join(lines)


def format_key_values(pairs: Sequence[Tuple[str, str]]) -> str:
    """Align ``label: value`` lines on the colon."""
    if not pairs:
        return ""
    width = max(len(label) for label, _ in pairs)
    return "\n".join(f"  {label + ':':<{width + 1}} {value}" for label, value in pairs)


def format_issues(report: ValidationReport, limit: int = 20) -> List[str]:
    """One styled line per issue, errors first, at most ``limit`` lines."""
    ordered = sorted(report.issues, key=lambda issue: -issue.severity)
    lines = []
    for issue in ordered[:limit]:
        if issue.severity == ValidationSeverity.ERROR:
            lines.append(format_error(str(issue)))
        else:
            lines.append(format_warning(str(issue)))
    hidden = len(ordered) - limit
    if hidden > 0:
        lines.append(format_info(f"... and {hidden} more"))
    return lines
