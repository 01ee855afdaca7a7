"""YAML/JSON parser for planview snapshot files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import DependencyEdge, Project, Sprint, TaskRecord, TaskStatus, User
from .schemas import SnapshotSchema, TaskSchema
from .store import Snapshot


def _task_from_schema(task_data: TaskSchema) -> TaskRecord:
    status = None
    if task_data.status is not None:
        status = TaskStatus(name=task_data.status.name, color=task_data.status.color)
    assignee = None
    if task_data.assignee is not None:
        assignee = User(
            id=task_data.assignee.id,
            first_name=task_data.assignee.first_name,
            last_name=task_data.assignee.last_name,
            avatar=task_data.assignee.avatar,
        )
    return TaskRecord(
        id=task_data.id,
        title=task_data.title,
        status=status,
        priority=task_data.priority,
        type=task_data.type,
        slug=task_data.slug,
        start_date=task_data.start_date,
        due_date=task_data.due_date,
        parent_task_id=task_data.parent_task_id,
        assignee=assignee,
        story_points=task_data.story_points,
        project_id=task_data.project_id,
        sprint_id=task_data.sprint_id,
    )


class SnapshotParser:
    """Parser for snapshot files.

    Only handles reading and conversion to domain models. For reference
    validation and config discovery use ``planview.loader.load_snapshot``.
    Files with a ``.json`` suffix are read with the json module, everything
    else with ``yaml.safe_load``.
    """

    def parse_file(self, file_path: Path | str) -> Snapshot:
        """Parse a snapshot file into a Snapshot."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data: Any = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ParseError(f"Failed to parse snapshot: {e}") from e

        if data is None:
            return Snapshot()
        if not isinstance(data, dict):
            raise ParseError("Snapshot must contain a mapping at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> Snapshot:
        """Convert already-loaded snapshot data into a Snapshot."""
        try:
            schema = SnapshotSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid snapshot structure: {e}") from e

        projects = [
            Project(id=p.id, name=p.name, start_date=p.start_date, end_date=p.end_date)
            for p in schema.projects
        ]
        sprints = [
            Sprint(
                id=s.id,
                name=s.name,
                start_date=s.start_date,
                end_date=s.end_date,
                status=s.status,
                project_id=s.project_id,
            )
            for s in schema.sprints
        ]
        tasks = [_task_from_schema(t) for t in schema.tasks]
        dependencies = [
            DependencyEdge(
                dependent_task_id=d.dependent_task_id,
                blocking_task_id=d.blocking_task_id,
                type=d.type,
            )
            for d in schema.dependencies
        ]

        return Snapshot(projects=projects, sprints=sprints, tasks=tasks, dependencies=dependencies)
