from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

TaskId = int | str
TaskStatus = Literal["todo", "in-progress", "done"]
VALID_STATUSES: tuple[str, ...] = ("todo", "in-progress", "done")


class Task(BaseModel):
    """Canonical task shape used by everything past the normalizer."""

    id: TaskId | None = None
    title: str = ""
    description: str | None = None
    project_id: TaskId | None = None
    tag_ids: list[TaskId] = Field(default_factory=list)
    due_date: str | None = None
    status: TaskStatus = "todo"


class Project(BaseModel):
    id: TaskId
    name: str = ""
    color: str | None = None
    description: str | None = None


class Tag(BaseModel):
    id: TaskId
    name: str = ""
    color: str | None = None


class DateRange(BaseModel):
    start: str | None = None
    end: str | None = None


class FilterSpec(BaseModel):
    project_id: TaskId | None = None
    tag_ids: list[TaskId] | None = None
    status: str | None = None
    date_range: DateRange | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _hyphenate_status(cls, value: Any) -> Any:
        # Same first-underscore rule the normalizer applies to task statuses.
        if isinstance(value, str):
            return value.replace("_", "-", 1)
        return value


class TaskDraft(BaseModel):
    """Fields a user enters when creating or editing a task."""

    title: str | None = None
    description: str | None = None
    project_id: TaskId | None = None
    tag_ids: list[TaskId] | None = None
    due_date: str | None = None
    status: TaskStatus | None = None


class ApiResult(BaseModel):
    data: Any = None
    error: str | None = None

    @model_validator(mode="after")
    def _data_or_error(self) -> "ApiResult":
        if self.error is not None and self.data is not None:
            raise ValueError("ApiResult carries either data or an error, not both")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class TaskStats(BaseModel):
    total: int = 0
    in_progress: int = 0
    completed: int = 0
