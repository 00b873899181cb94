"""Configuration management commands."""

import typer

from task_timer.services.config_service import get_config_service
from task_timer.utils.ui.console import get_console
from task_timer.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _parse_value(value: str) -> str | int | bool | None:
    """Convert command-line text to the closest JSON-ish type."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("null", "none"):
        return None
    if value.isdigit():
        return int(value)
    return value


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the full configuration."""
    service = get_config_service()
    console.print_json(service.config.model_dump_json())
    console.print(f"[dim]{service.config_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.default_minutes)"),
) -> None:
    """Get a configuration value."""
    console.print(get_config_service().get(key))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.default_minutes)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed = _parse_value(value)
    get_config_service().set(key, parsed)
    format_success(f"Configuration '{key}' set to '{parsed}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset all settings to defaults?"):
        console.print("[dim]Cancelled[/dim]")
        return
    get_config_service().reset_config()
    format_success("Configuration reset")
