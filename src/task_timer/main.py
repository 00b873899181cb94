"""Main entry point for the Task Timer CLI."""

import typer

from task_timer import __version__
from task_timer.commands import config, tasks, timer
from task_timer.utils.ui.console import get_console

app = typer.Typer(
    name="task-timer",
    help="A todo list with a pomodoro countdown",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(timer.app, name="timer", help="Pomodoro countdown timer")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Task Timer[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
