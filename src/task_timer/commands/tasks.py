"""Task management commands."""

import typer
from rich.prompt import Confirm

from task_timer.models.task import TaskPriority
from task_timer.utils.ui.console import get_console
from task_timer.utils.ui.formatters import (
    format_stats,
    format_success,
    format_tasks,
    format_warning,
)

from .decorators import command_wrapper
from .utils import get_controller

app = typer.Typer(help="Task management commands")
console = get_console()


@app.command("add")
@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Longer description"
    ),
    priority: TaskPriority = typer.Option(
        TaskPriority.MEDIUM, "--priority", "-p", help="Priority: H, M or L"
    ),
    estimate: int | None = typer.Option(
        None, "--estimate", "-e", min=1, help="Estimated duration in minutes"
    ),
    tags: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)"),
) -> None:
    """Add a task to the end of the open tasks."""
    store = get_controller().store
    task = store.add(
        title,
        description=description,
        priority=priority,
        estimated_duration=estimate,
        tags=tags,
    )
    format_success(f"Added task {task.short_id}: {task.title}")


@app.command("list")
@command_wrapper
def list_tasks(
    search: str = typer.Option("", "--search", "-s", help="Filter by title or description"),
) -> None:
    """List tasks, open tasks first."""
    store = get_controller().store
    tasks = store.search(search)
    if search and not tasks:
        console.print(f"[yellow]No tasks match '{search}'[/yellow]")
        return
    format_tasks(tasks)


@app.command("current")
@command_wrapper
def current_task() -> None:
    """Show the first open task."""
    task = get_controller().current_task
    if task is None:
        console.print("[green]All tasks are done[/green]")
        return
    console.print(f"[bold]{task.title}[/bold] [dim]({task.short_id})[/dim]")
    if task.task_description:
        console.print(task.task_description)


@app.command("toggle")
@command_wrapper
def toggle_task(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
) -> None:
    """Mark a task done, or reopen a finished one."""
    store = get_controller().store
    task = store.toggle_completion(store.resolve(task_id).id)
    state = "completed" if task.is_completed else "reopened"
    format_success(f"Task {task.short_id} {state}")


@app.command("delete")
@command_wrapper
def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    store = get_controller().store
    task = store.resolve(task_id)
    if not yes and not Confirm.ask(f"Delete '{task.title}'?"):
        console.print("[dim]Cancelled[/dim]")
        return
    store.delete(task.id)
    format_success(f"Deleted task {task.short_id}")


@app.command("move")
@command_wrapper
def move_tasks(
    sources: list[int] = typer.Argument(..., help="List positions to move"),
    to: int = typer.Option(..., "--to", help="Position to insert before"),
) -> None:
    """Reorder tasks within the open or the finished group."""
    store = get_controller().store
    if store.move(sources, to):
        format_success("Tasks reordered")
        format_tasks(store.tasks)
    else:
        format_warning("Move rejected: tasks cannot cross between open and finished")
        raise typer.Exit(2)


@app.command("clear-completed")
@command_wrapper
def clear_completed(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete every finished task."""
    store = get_controller().store
    if not store.stats()["completed"]:
        console.print("[yellow]No completed tasks[/yellow]")
        return
    if not yes and not Confirm.ask("This deletes all completed tasks. Continue?"):
        console.print("[dim]Cancelled[/dim]")
        return
    removed = store.clear_completed()
    format_success(f"Removed {removed} completed task(s)")


@app.command("stats")
@command_wrapper
def show_stats() -> None:
    """Show completed, open and total counts."""
    format_stats(get_controller().store.stats())
