from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from .api_client import TaskFlowClient
from .board import load_board
from .config import Settings, load_settings
from .dates import parse_due_date
from .logging_setup import setup_logging
from .models import VALID_STATUSES, FilterSpec, TaskDraft, TaskId
from .render import render_project_table, render_stats, render_task_table
from .storage import TokenStore

app = typer.Typer(help="TaskFlow task manager CLI")
console = Console()


def _settings() -> Settings:
    settings = load_settings()
    setup_logging(settings.log_level)
    return settings


def _make_client(settings: Settings, token_store: TokenStore) -> TaskFlowClient:
    return TaskFlowClient(settings.api_url, token_store=token_store)


def _authed_client() -> TaskFlowClient:
    settings = _settings()
    token_store = TokenStore(settings.data_dir)
    if not token_store.load():
        raise typer.BadParameter("Not logged in. Run `taskflow login` first.")
    return _make_client(settings, token_store)


def _coerce_id(value: str | None) -> TaskId | None:
    if value is None:
        return None
    value = value.strip()
    return int(value) if value.isdigit() else value


def _parse_status(value: str | None) -> str | None:
    if value is None:
        return None
    status = value.strip().lower().replace("_", "-", 1)
    if status not in VALID_STATUSES:
        raise typer.BadParameter(f"Status must be one of: {', '.join(VALID_STATUSES)}")
    return status


def _parse_due(value: str | None) -> str | None:
    if value is None:
        return None
    if parse_due_date(value) is None or len(value) != 10:
        raise typer.BadParameter("Due date must be in the form YYYY-MM-DD")
    return value


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)


@app.command()
def login(token: str = typer.Option(..., "--token", prompt=True, hide_input=True, help="API bearer token")) -> None:
    """Store the API token used by every other command."""
    settings = _settings()
    token = token.strip()
    if not token:
        raise typer.BadParameter("Token must not be empty.")
    TokenStore(settings.data_dir).save(token)
    console.print("Logged in.")


@app.command()
def logout() -> None:
    """Forget the stored API token."""
    settings = _settings()
    TokenStore(settings.data_dir).clear()
    console.print("Logged out.")


@app.command("tasks")
def list_tasks(
    project: str | None = typer.Option(None, "--project", help="Only tasks in this project id"),
    tag: list[str] = typer.Option(None, "--tag", help="Only tasks carrying any of these tag ids"),
    status: str | None = typer.Option(None, "--status", help="todo, in-progress or done"),
    stats: bool = typer.Option(False, "--stats", help="Show the overview counts"),
) -> None:
    """List tasks ordered by due date."""
    spec = FilterSpec(
        project_id=_coerce_id(project),
        tag_ids=[_coerce_id(item) for item in tag] if tag else None,
        status=_parse_status(status),
    )
    with _authed_client() as client:
        board = load_board(client)
    if board.error:
        _fail(board.error)

    visible = board.visible(spec)
    console.print(render_task_table(visible, board))
    console.print(f"{len(visible)} {'task' if len(visible) == 1 else 'tasks'} found")
    if stats:
        console.print(render_stats(board.stats()))


@app.command()
def projects() -> None:
    """List projects with their task counts."""
    with _authed_client() as client:
        board = load_board(client)
    if board.error:
        _fail(board.error)
    console.print(render_project_table(board.projects, board.tasks))


@app.command()
def add(
    title: str = typer.Option(..., "--title", help="Task title"),
    description: str | None = typer.Option(None, "--description", help="Task description"),
    project: str | None = typer.Option(None, "--project", help="Project id"),
    tag: list[str] = typer.Option(None, "--tag", help="Tag id (repeatable)"),
    due: str | None = typer.Option(None, "--due", help="Due date YYYY-MM-DD"),
    status: str = typer.Option("todo", "--status", help="todo, in-progress or done"),
) -> None:
    """Create a task."""
    if not title.strip():
        raise typer.BadParameter("Title must not be empty.")
    draft = TaskDraft(
        title=title.strip(),
        description=description,
        project_id=_coerce_id(project),
        tag_ids=[_coerce_id(item) for item in tag] if tag else [],
        due_date=_parse_due(due),
        status=_parse_status(status),
    )
    with _authed_client() as client:
        result = client.create_task(draft)
    if result.error:
        _fail(result.error)
    console.print("Task created successfully!")


@app.command()
def edit(
    task_id: str = typer.Argument(..., help="Task id"),
    title: str | None = typer.Option(None, "--title"),
    description: str | None = typer.Option(None, "--description"),
    project: str | None = typer.Option(None, "--project"),
    tag: list[str] = typer.Option(None, "--tag", help="Replace tags (repeatable)"),
    due: str | None = typer.Option(None, "--due"),
    status: str | None = typer.Option(None, "--status"),
) -> None:
    """Update fields of an existing task."""
    draft = TaskDraft(
        title=title,
        description=description,
        project_id=_coerce_id(project),
        tag_ids=[_coerce_id(item) for item in tag] if tag else None,
        due_date=_parse_due(due),
        status=_parse_status(status),
    )
    with _authed_client() as client:
        result = client.update_task(_coerce_id(task_id), draft)
    if result.error:
        _fail(result.error)
    console.print("Task updated successfully!")


@app.command()
def delete(task_id: str = typer.Argument(..., help="Task id")) -> None:
    """Delete a task."""
    with _authed_client() as client:
        result = client.delete_task(_coerce_id(task_id))
    if result.error:
        _fail(result.error)
    console.print("Task deleted successfully!")


if __name__ == "__main__":
    app()
