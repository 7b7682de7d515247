from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .models import VALID_STATUSES, Project, Tag, Task, TaskId

logger = logging.getLogger(__name__)

STATUS_ALIASES = {"completed": "done"}


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def normalize_status(value: Any) -> str:
    """Map a raw status onto one of the canonical values.

    Only the first underscore is turned into a hyphen, so ``in_progress``
    becomes ``in-progress``. Missing or unknown statuses fall back to ``todo``.
    """
    if not value:
        return "todo"
    status = str(value).replace("_", "-", 1)
    status = STATUS_ALIASES.get(status, status)
    if status not in VALID_STATUSES:
        logger.debug("Unknown task status %r, using 'todo'", value)
        return "todo"
    return status


def _tag_id(item: Any) -> TaskId:
    if isinstance(item, Mapping):
        return item.get("id")
    return item


def resolve_tag_ids(raw: Mapping[str, Any]) -> list[TaskId]:
    tag_ids = raw.get("tagIds")
    if isinstance(tag_ids, list):
        return list(tag_ids)
    tags = raw.get("tags")
    if isinstance(tags, list):
        return [tag_id for tag_id in (_tag_id(item) for item in tags) if tag_id is not None]
    return []


def _date_part(value: Any) -> str | None:
    # Backends may send a full timestamp; only the calendar date is kept.
    text = str(value).strip() if value is not None else ""
    if not text:
        return None
    return text[:10]


def normalize_task(raw: Mapping[str, Any]) -> Task:
    return Task(
        id=raw.get("id"),
        title=_text(raw.get("title")) or "",
        description=_text(raw.get("description")),
        project_id=_first_present(raw, "project_id", "projectId"),
        tag_ids=resolve_tag_ids(raw),
        due_date=_date_part(_first_present(raw, "due_date", "dueDate")),
        status=normalize_status(raw.get("status")),
    )


def normalize_tasks(raw_tasks: Iterable[Mapping[str, Any]]) -> list[Task]:
    return [normalize_task(raw) for raw in raw_tasks]


def normalize_project(raw: Mapping[str, Any]) -> Project:
    return Project(
        id=raw.get("id"),
        name=_text(raw.get("name")) or "",
        color=_text(raw.get("color")),
        description=_text(raw.get("description")),
    )


def collect_tags(raw_tasks: Iterable[Mapping[str, Any]]) -> list[Tag]:
    """Build the tag catalogue from tags embedded in raw task records."""
    seen: dict[TaskId, Tag] = {}
    for raw in raw_tasks:
        tags = raw.get("tags")
        if isinstance(tags, list):
            for item in tags:
                tag_id = _tag_id(item)
                if tag_id is None or tag_id in seen:
                    continue
                if isinstance(item, Mapping):
                    seen[tag_id] = Tag(id=tag_id, name=_text(item.get("name")) or str(tag_id), color=_text(item.get("color")))
                else:
                    seen[tag_id] = Tag(id=tag_id, name=str(tag_id))
        for tag_id in resolve_tag_ids(raw):
            if tag_id is not None and tag_id not in seen:
                seen[tag_id] = Tag(id=tag_id, name=str(tag_id))
    return list(seen.values())
