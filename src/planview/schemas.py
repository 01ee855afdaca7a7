"""Pydantic schemas for snapshot file validation."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import DependencyType, SprintStatus, TaskPriority, TaskType


def to_utc_datetime(value: Any) -> Any:
    """Coerce dates and naive datetimes to timezone-aware UTC datetimes.

    Strings are parsed as ISO-8601. Anything else is left for pydantic to reject.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        text = value.strip()
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            value = date.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


class _DatedSchema(BaseModel):
    """Base for schemas carrying optional timestamps."""

    @field_validator("start_date", "end_date", "due_date", mode="before", check_fields=False)
    @classmethod
    def coerce_dates(cls, v: Any) -> Any:
        """Interpret plain dates and naive timestamps as UTC."""
        return to_utc_datetime(v)


class ProjectSchema(_DatedSchema):
    """Schema for a project entry."""

    id: str
    name: str
    start_date: datetime | None = None
    end_date: datetime | None = None


class SprintSchema(_DatedSchema):
    """Schema for a sprint entry."""

    id: str
    project_id: str
    name: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: SprintStatus = SprintStatus.PLANNING


class StatusSchema(BaseModel):
    """Schema for a task status."""

    name: str
    color: str = ""


class UserSchema(BaseModel):
    """Schema for an assignee."""

    id: str
    first_name: str = ""
    last_name: str = ""
    avatar: str | None = None


class TaskSchema(_DatedSchema):
    """Schema for a task entry."""

    id: str
    project_id: str
    title: str
    status: StatusSchema | None = None
    sprint_id: str | None = None
    slug: str = ""
    priority: str = TaskPriority.MEDIUM.value
    type: str = TaskType.TASK.value
    start_date: datetime | None = None
    due_date: datetime | None = None
    parent_task_id: str | None = None
    assignee: UserSchema | None = None
    story_points: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def status_from_name(cls, v: Any) -> Any:
        """Allow a bare status name instead of a mapping."""
        if isinstance(v, str):
            return {"name": v}
        return v

    @field_validator("priority", "type", mode="before")
    @classmethod
    def coerce_enum_to_string(cls, v: Any) -> str:
        """Store enum-ish fields as plain upper-case strings."""
        return str(v).upper()


class DependencySchema(BaseModel):
    """Schema for a dependency edge."""

    blocking_task_id: str
    dependent_task_id: str
    type: DependencyType = DependencyType.FINISH_START


class SnapshotSchema(BaseModel):
    """Schema for the entire snapshot file."""

    projects: list[ProjectSchema] = Field(default_factory=list[ProjectSchema])
    sprints: list[SprintSchema] = Field(default_factory=list[SprintSchema])
    tasks: list[TaskSchema] = Field(default_factory=list[TaskSchema])
    dependencies: list[DependencySchema] = Field(default_factory=list[DependencySchema])

    @field_validator("projects", "sprints", "tasks", "dependencies", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        """Treat an empty section as an empty list."""
        if v is None:
            return []
        return v
