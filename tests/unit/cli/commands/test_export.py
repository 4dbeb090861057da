"""Unit tests for the export command."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from openpyxl import load_workbook

from timekeeper.cli import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


def export_args(records_file, *extra):
    return [
        "export",
        "--start",
        "2025-11",
        "--end",
        "2025-11",
        "--source",
        records_file,
        *extra,
    ]


class TestExportCommand:
    """Test suite for the export command."""

    def test_export_help(self, runner):
        result = runner.invoke(cli, ["export", "--help"])

        assert result.exit_code == 0
        assert "--format" in result.output
        assert "--output" in result.output

    def test_export_default_xlsx(self, runner, records_file, tmp_path):
        result = runner.invoke(cli, export_args(records_file))

        assert result.exit_code == 0, result.output
        expected = tmp_path / "reports" / "time_entries_2025-11-01_to_2025-11-30.xlsx"
        assert expected.exists()
        assert "Report written to" in result.output
        sheet = load_workbook(expected)["Time Entries"]
        assert sheet["A1"].value == "Time Entries Report"

    def test_export_csv_to_output(self, runner, records_file, tmp_path):
        target = tmp_path / "out" / "november.csv"

        result = runner.invoke(
            cli, export_args(records_file, "--format", "csv", "--output", str(target))
        )

        assert result.exit_code == 0, result.output
        content = target.read_text(encoding="utf-8")
        assert content.splitlines()[0].startswith("Employee,Date,Entry,Exit")
        assert "Total Ana" in content

    def test_export_html_uses_report_title(
        self, runner, records_file, tmp_path, monkeypatch
    ):
        monkeypatch.setenv("REPORT_TITLE", "Store Hours")
        monkeypatch.setenv("REPORT_OUTPUT_DIR", str(tmp_path / "docs"))

        result = runner.invoke(cli, export_args(records_file, "--format", "HTML"))

        assert result.exit_code == 0, result.output
        written = list(Path(tmp_path / "docs").glob("*.html"))
        assert len(written) == 1
        assert "<h1>Store Hours</h1>" in written[0].read_text(encoding="utf-8")

    def test_export_empty_period(self, runner, records_file, tmp_path):
        result = runner.invoke(
            cli,
            [
                "export",
                "--start",
                "2024-01",
                "--end",
                "2024-01",
                "--source",
                records_file,
                "--format",
                "csv",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "No time entries found for this period." in result.output
        expected = tmp_path / "reports" / "time_entries_2024-01-01_to_2024-01-31.csv"
        assert expected.exists()

    def test_export_invalid_format(self, runner, records_file):
        result = runner.invoke(cli, export_args(records_file, "--format", "pdf"))
        assert result.exit_code == 2

    def test_export_unwritable_output(self, runner, records_file, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result = runner.invoke(
            cli,
            export_args(
                records_file, "--format", "csv", "--output", str(blocker / "x.csv")
            ),
        )

        assert result.exit_code == 4
        assert "Processing Error" in result.output
