"""Unit tests for CLI main entry point."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from timekeeper import __version__
from timekeeper.cli import cli, main


class TestCLIMain:
    """Test suite for CLI main entry point."""

    @pytest.fixture
    def runner(self):
        """Create a Click CLI test runner."""
        return CliRunner()

    def test_cli_group_exists(self, runner):
        """Test that CLI group exists and can be invoked."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_cli_help_text(self, runner):
        """Test that CLI help text is informative."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Timekeeper CLI" in result.output
        assert "Commands:" in result.output

    def test_cli_version_flag(self, runner):
        """Test that --version flag works."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("command", ["summary", "export", "preview", "submit"])
    def test_cli_has_command(self, runner, command):
        """Test that every command is registered."""
        result = runner.invoke(cli, ["--help"])
        assert command in result.output

    def test_unknown_command_shows_error(self, runner):
        """Test that unknown commands show helpful error."""
        result = runner.invoke(cli, ["unknown-command"])
        assert result.exit_code != 0
        assert "No such command" in result.output or "Error" in result.output

    def test_main_configures_logging(self):
        with patch("timekeeper.cli.configure_logging") as mock_configure, patch(
            "timekeeper.cli.load_dotenv"
        ) as mock_load_dotenv, patch("timekeeper.cli.cli") as mock_cli:
            main()

        mock_load_dotenv.assert_called_once()
        config = mock_configure.call_args.args[0]
        assert config.log_level == "WARNING"
        mock_cli.assert_called_once()
