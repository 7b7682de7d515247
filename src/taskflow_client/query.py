from __future__ import annotations

from typing import Any, Iterable, Mapping

from .models import FilterSpec, Task, TaskStats

_SPEC_KEYS = {
    "projectId": "project_id",
    "tagIds": "tag_ids",
    "dateRange": "date_range",
}


def coerce_filter_spec(spec: FilterSpec | Mapping[str, Any] | None) -> FilterSpec:
    """Accept a FilterSpec, a plain mapping (either key spelling) or None."""
    if spec is None:
        return FilterSpec()
    if isinstance(spec, FilterSpec):
        return spec
    values = {_SPEC_KEYS.get(key, key): value for key, value in spec.items()}
    return FilterSpec.model_validate(values)


def _matches(task: Task, spec: FilterSpec) -> bool:
    if spec.project_id is not None and task.project_id != spec.project_id:
        return False
    if spec.tag_ids is not None:
        # An empty tag list is an empty OR-set: nothing matches.
        if not any(tag_id in task.tag_ids for tag_id in spec.tag_ids):
            return False
    if spec.status is not None and task.status != spec.status:
        return False
    # date_range is accepted but carries no filtering behaviour.
    return True


def filter_tasks(tasks: Iterable[Task], spec: FilterSpec | Mapping[str, Any] | None = None) -> list[Task]:
    spec = coerce_filter_spec(spec)
    return [task for task in tasks if _matches(task, spec)]


def sort_tasks_by_due_date(tasks: Iterable[Task]) -> list[Task]:
    """Return a new list ordered by ascending due date.

    ISO ``YYYY-MM-DD`` strings sort chronologically as plain strings. Tasks
    without a due date go last; ties keep their input order.
    """

    def sort_key(task: Task) -> tuple[bool, str]:
        return (not task.due_date, task.due_date or "")

    return sorted(tasks, key=sort_key)


def task_stats(tasks: Iterable[Task]) -> TaskStats:
    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        if task.status == "in-progress":
            stats.in_progress += 1
        elif task.status == "done":
            stats.completed += 1
    return stats
