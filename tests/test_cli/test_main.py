"""Tests for CLI main module."""

import pytest
from unittest.mock import MagicMock, patch

import typer

from wpspawn.cli.main import _run_cli_command
from wpspawn.loader import SiteLoadError


@patch("wpspawn.cli.main.setup_logging")
@patch("wpspawn.cli.main.SiteLoader")
@patch("wpspawn.cli.main.console")
def test_run_cli_command_success(mock_console, mock_loader, mock_setup_logging):
    """Test the CLI command runner on a successful execution."""
    mock_handler = MagicMock()

    _run_cli_command(mock_handler, config=None, log_level="DEBUG", site_file="site.yaml")

    mock_loader.assert_called_once_with(config_path=None)
    mock_setup_logging.assert_called_once_with("DEBUG")
    mock_handler.assert_called_once_with(mock_loader.return_value, site_file="site.yaml")
    mock_console.print.assert_not_called()


@patch("wpspawn.cli.main.setup_logging")
@patch("wpspawn.cli.main.SiteLoader")
@patch("wpspawn.cli.main.console")
def test_run_cli_command_uses_config_log_level(mock_console, mock_loader, mock_setup_logging):
    """Test that the configured log level applies without --log-level."""
    mock_loader.return_value.load_config.return_value.log_level = "WARNING"

    _run_cli_command(MagicMock(), config=None, log_level=None)

    mock_setup_logging.assert_called_once_with("WARNING")


@patch("wpspawn.cli.main.setup_logging")
@patch("wpspawn.cli.main.SiteLoader")
@patch("wpspawn.cli.main.console")
def test_run_cli_command_load_error(mock_console, mock_loader, mock_setup_logging):
    """Test the CLI command runner when a SiteLoadError is raised."""
    mock_handler = MagicMock(side_effect=SiteLoadError("File not found: site.yaml"))

    with pytest.raises(typer.Exit) as exc_info:
        _run_cli_command(mock_handler, config=None, log_level="INFO", site_file="site.yaml")

    mock_console.print.assert_called_once_with("[red]Error:[/red] File not found: site.yaml")
    assert exc_info.value.exit_code == 1
