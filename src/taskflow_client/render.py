from __future__ import annotations

from datetime import date
from typing import Iterable

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .board import Board
from .dates import format_date, is_overdue
from .models import Project, Task, TaskStats

UNTITLED_LABEL = "(untitled)"

STATUS_STYLES = {
    "todo": "dim",
    "in-progress": "cyan",
    "done": "green",
}


def _color_style(color: str | None) -> str:
    # Only hex colours are passed through to rich; anything else renders plain.
    if color and color.startswith("#") and len(color) == 7:
        return color
    return ""


def _status_text(status: str) -> Text:
    return Text(status.replace("-", " "), style=STATUS_STYLES.get(status, ""))


def _due_text(task: Task, today: date | None) -> Text:
    label = format_date(task.due_date, today)
    style = "red" if is_overdue(task.due_date, today) else ""
    return Text(label, style=style)


def render_task_table(tasks: Iterable[Task], board: Board, today: date | None = None) -> Table | str:
    task_list = list(tasks)
    if not task_list:
        return "No tasks found."

    table = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold white", pad_edge=False)
    table.add_column("ID", style="bright_black", no_wrap=True)
    table.add_column("Title", overflow="ellipsis")
    table.add_column("Status", no_wrap=True)
    table.add_column("Project")
    table.add_column("Tags")
    table.add_column("Due", no_wrap=True)

    for task in task_list:
        project = board.project_for(task)
        project_label = Text(project.name, style=_color_style(project.color)) if project else Text("")
        tags = ", ".join(tag.name for tag in board.tags_for(task))
        table.add_row(
            str(task.id),
            Text(task.title) if task.title else Text(UNTITLED_LABEL, style="dim italic"),
            _status_text(task.status),
            project_label,
            Text(tags),
            _due_text(task, today),
        )
    return table


def render_project_table(projects: Iterable[Project], tasks: Iterable[Task]) -> Table | str:
    project_list = list(projects)
    if not project_list:
        return "No projects found."

    counts: dict[object, int] = {}
    for task in tasks:
        counts[task.project_id] = counts.get(task.project_id, 0) + 1

    table = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold white", pad_edge=False)
    table.add_column("ID", style="bright_black", no_wrap=True)
    table.add_column("Name")
    table.add_column("Tasks", justify="right")
    table.add_column("Description", overflow="ellipsis")
    for project in project_list:
        table.add_row(
            str(project.id),
            Text(project.name, style=_color_style(project.color)),
            str(counts.get(project.id, 0)),
            Text(project.description or ""),
        )
    return table


def render_stats(stats: TaskStats) -> Panel:
    body = Text()
    body.append(f"Total Tasks  {stats.total}\n")
    body.append(f"In Progress  {stats.in_progress}\n", style="cyan")
    body.append(f"Completed    {stats.completed}", style="green")
    return Panel(body, title="Overview", expand=False)
