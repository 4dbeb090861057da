"""CLI commands."""

from timekeeper.cli.commands.export import export
from timekeeper.cli.commands.preview import preview
from timekeeper.cli.commands.submit import submit
from timekeeper.cli.commands.summary import summary

__all__ = ["export", "preview", "submit", "summary"]
