"""Output formatters for the command line."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from task_timer.models.task import Task, TaskPriority
from task_timer.models.timer import TimerPhase, TimerState

from .console import get_console

console = get_console()

PRIORITY_COLORS = {
    TaskPriority.HIGH: "red",
    TaskPriority.MEDIUM: "yellow",
    TaskPriority.LOW: "green",
}

PHASE_LABELS = {
    TimerPhase.IDLE: ("空闲", "dim"),
    TimerPhase.RUNNING: ("专注中", "bold orange1"),
    TimerPhase.PAUSED: ("已暂停", "yellow"),
    TimerPhase.COMPLETED: ("已完成", "bold green"),
}


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def format_duration(minutes: int | None) -> str:
    return f"{minutes}分钟" if minutes is not None else "—"


def build_tasks_table(tasks: Sequence[Task], title: str = "Tasks") -> Table:
    """Build a table of tasks in list order, index first."""
    table = Table(title=title, show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("", justify="center")
    table.add_column("P", justify="center")
    table.add_column("Title")
    table.add_column("Tags", style="magenta")
    table.add_column("Est.", justify="right")
    table.add_column("Status")

    for index, task in enumerate(tasks):
        title_text = Text(task.title, style="dim strike" if task.is_completed else "")
        table.add_row(
            str(index),
            task.short_id,
            "✓" if task.is_completed else "○",
            Text(task.priority.value, style=PRIORITY_COLORS[task.priority]),
            title_text,
            ", ".join(task.tags),
            format_duration(task.estimated_duration),
            task.status.value,
        )
    return table


def format_tasks(tasks: Sequence[Task], title: str = "Tasks") -> None:
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return
    console.print(build_tasks_table(tasks, title))


def format_stats(stats: dict[str, int]) -> None:
    total = stats["total"]
    percentage = (stats["completed"] / total * 100) if total else 0.0
    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"{stats['completed']} 已完成", style="green")
    header.append(" · ", style="dim")
    header.append(f"{stats['incomplete']} 进行中", style="blue")
    header.append(" · ", style="dim")
    header.append(f"{total} 总任务", style="yellow")
    console.print(header)
    console.print(f"{get_progress_bar(percentage)} {percentage:.0f}%")


def render_timer(state: TimerState, task: Task | None = None) -> Text:
    """Single-line timer status used by the live countdown."""
    label, style = PHASE_LABELS[state.phase]
    text = Text()
    text.append("⏱  ")
    text.append(state.display, style=f"bold {style}")
    text.append(f"  {label}", style=style)
    if task is not None:
        text.append(f"  {task.title}", style="white")
    return text
