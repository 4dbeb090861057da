"""Unit tests for the preview command."""

import pytest
from click.testing import CliRunner

from timekeeper.cli import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


class TestPreviewCommand:
    """Test suite for the preview command."""

    def test_preview_with_extra_time(self, runner):
        result = runner.invoke(
            cli,
            [
                "preview",
                "--entry",
                "09:00",
                "--exit",
                "17:30",
                "--daily-rate",
                "100",
                "--extra",
                "01:30",
                "--extra-rate",
                "20",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Worked hours: 8.50" in result.output
        assert "Extra hours:  01:30 (1.50)" in result.output
        assert "Total hours:  10.00" in result.output
        assert "Total pay:    R$ 130,00" in result.output

    def test_preview_overnight_shift(self, runner):
        args = ["preview", "--entry", "22:00", "--exit", "02:00", "--daily-rate", "90"]
        result = runner.invoke(cli, args)

        assert result.exit_code == 0, result.output
        assert "Worked hours: 4.00" in result.output
        assert "R$ 90,00" in result.output

    def test_preview_open_shift(self, runner):
        result = runner.invoke(
            cli, ["preview", "--entry", "09:00", "--daily-rate", "100"]
        )

        assert result.exit_code == 0, result.output
        assert "Open shift" in result.output
        assert "Worked hours: 0.00" in result.output

    def test_preview_decimal_comma_amounts(self, runner):
        result = runner.invoke(
            cli,
            [
                "preview",
                "--entry",
                "08:00",
                "--exit",
                "16:00",
                "--daily-rate",
                "1234,5",
                "--extra",
                "2,25",
                "--extra-rate",
                "10",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Extra hours:  02:15 (2.25)" in result.output
        assert "R$ 1.257,00" in result.output

    def test_preview_currency_settings(self, runner, monkeypatch):
        monkeypatch.setenv("REPORT_CURRENCY_SYMBOL", "$")
        monkeypatch.setenv("REPORT_DECIMAL_SEPARATOR", ".")
        monkeypatch.setenv("REPORT_THOUSANDS_SEPARATOR", ",")

        result = runner.invoke(
            cli,
            ["preview", "--entry", "09:00", "--exit", "17:00", "--daily-rate", "1480"],
        )

        assert result.exit_code == 0, result.output
        assert "$ 1,480.00" in result.output

    def test_preview_invalid_time(self, runner):
        result = runner.invoke(
            cli, ["preview", "--entry", "25:00", "--daily-rate", "100"]
        )

        assert result.exit_code == 2
        assert "Expected HH:MM" in result.output

    def test_preview_negative_rate(self, runner):
        result = runner.invoke(
            cli, ["preview", "--entry", "09:00", "--daily-rate", "-5"]
        )

        assert result.exit_code == 2
        assert "non-negative" in result.output
