"""Pomodoro countdown commands."""

import asyncio

import typer
from rich.live import Live

from task_timer.models.task import Task
from task_timer.models.timer import format_remaining
from task_timer.services.clock import AsyncioClock
from task_timer.services.config_service import get_config_service
from task_timer.utils.ui.console import get_console
from task_timer.utils.ui.formatters import format_success, render_timer

from .decorators import command_wrapper
from .utils import get_controller

app = typer.Typer(help="Pomodoro countdown timer")
console = get_console()


async def run_countdown(minutes: int, task_id: str | None = None) -> Task | None:
    """Count down *minutes* on the event loop, crediting the focused task.

    Returns the focused task (after crediting) once the countdown completes.
    """
    controller = get_controller(AsyncioClock())
    store = controller.store
    task = store.resolve(task_id) if task_id else controller.current_task
    engine = controller.engine
    engine.set_duration(minutes)

    finished = asyncio.Event()
    controller.on_timer_completed(lambda _event: finished.set())

    try:
        with Live(render_timer(engine.state, task), console=console, refresh_per_second=4) as live:
            controller.subscribe(lambda snapshot: live.update(render_timer(snapshot.timer, task)))
            engine.start()
            await finished.wait()
    finally:
        controller.close()

    if task is None:
        return None
    credited = task.model_copy(update={"actual_duration": (task.actual_duration or 0) + minutes})
    store.update(credited)
    return credited


@app.command("run")
@command_wrapper
def run_timer(
    minutes: int | None = typer.Option(
        None, "--minutes", "-m", help="Countdown length in minutes (default from config)"
    ),
    task_id: str | None = typer.Option(
        None, "--task", help="Task to focus on (defaults to the first open task)"
    ),
) -> None:
    """Run a live countdown. Ctrl-C stops it."""
    if minutes is None:
        minutes = get_config_service().config.timer.default_minutes

    console.print(f"[bold cyan]Focus session[/bold cyan] {format_remaining(minutes * 60)}")
    try:
        task = asyncio.run(run_countdown(minutes, task_id))
    except KeyboardInterrupt:
        console.print("\n[yellow]Countdown stopped[/yellow]")
        raise typer.Exit(0)

    console.bell()
    format_success("Countdown complete")
    if task is not None:
        console.print(f"[dim]{task.title}: {task.actual_duration} minute(s) logged[/dim]")
