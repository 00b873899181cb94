"""Tests for the top-level application and version command."""

from typer.testing import CliRunner

from task_timer import __version__
from task_timer.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "tasks" in result.output
    assert "timer" in result.output


def test_subcommand_help():
    result = runner.invoke(app, ["tasks", "--help"])
    assert result.exit_code == 0
    assert "clear-completed" in result.output
