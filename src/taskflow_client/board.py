from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .api_client import TaskFlowClient
from .models import FilterSpec, Project, Tag, Task, TaskStats
from .normalize import collect_tags, normalize_project, normalize_tasks
from .query import filter_tasks, sort_tasks_by_due_date, task_stats

logger = logging.getLogger(__name__)


@dataclass
class Board:
    tasks: list[Task] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    error: str | None = None

    def visible(self, spec: FilterSpec | Mapping[str, Any] | None = None) -> list[Task]:
        return sort_tasks_by_due_date(filter_tasks(self.tasks, spec))

    def stats(self) -> TaskStats:
        return task_stats(self.tasks)

    def project_for(self, task: Task) -> Project | None:
        if task.project_id is None:
            return None
        for project in self.projects:
            if project.id == task.project_id:
                return project
        return None

    def tags_for(self, task: Task) -> list[Tag]:
        by_id = {tag.id: tag for tag in self.tags}
        return [by_id[tag_id] for tag_id in task.tag_ids if tag_id in by_id]


def build_board(raw_tasks: list[dict[str, Any]], raw_projects: list[dict[str, Any]]) -> Board:
    return Board(
        tasks=normalize_tasks(raw_tasks),
        projects=[normalize_project(raw) for raw in raw_projects],
        tags=collect_tags(raw_tasks),
    )


def _as_list(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    return []


def load_board(client: TaskFlowClient) -> Board:
    """Fetch tasks and projects and normalize them once.

    When either request fails the board is empty and carries the error.
    """
    tasks_result = client.get_tasks()
    projects_result = client.get_projects()
    error = tasks_result.error or projects_result.error
    if error:
        logger.warning("Could not load board: %s", error)
        return Board(error=error)
    return build_board(_as_list(tasks_result.data), _as_list(projects_result.data))
