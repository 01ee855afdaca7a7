"""Task store interface and an in-memory implementation.

The engine never talks to a database directly. It reads through the
``TaskStore`` protocol, so any persistence layer can back it as long as it
returns the read-only projections from ``planview.models``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .models import DependencyEdge, Project, Sprint, TaskRecord


class TaskStore(Protocol):
    """Read-only queries the scheduling engine needs."""

    def get_project(self, project_id: str) -> Project | None:
        """Get a project by id, or None."""
        ...

    def list_project_tasks(self, project_id: str) -> list[TaskRecord]:
        """List a project's tasks in creation order."""
        ...

    def list_project_sprints(self, project_id: str) -> list[Sprint]:
        """List a project's sprints."""
        ...

    def list_project_dependencies(self, project_id: str) -> list[DependencyEdge]:
        """List dependency edges whose dependent task belongs to the project."""
        ...

    def get_sprint(self, sprint_id: str) -> Sprint | None:
        """Get a sprint by id, or None."""
        ...

    def list_sprint_tasks(self, sprint_id: str) -> list[TaskRecord]:
        """List a sprint's tasks in creation order."""
        ...

    def list_scheduled_assigned_tasks(self, project_id: str) -> list[TaskRecord]:
        """List project tasks that have an assignee, a start date and a due date."""
        ...


def _default_projects() -> list[Project]:
    return []


def _default_sprints() -> list[Sprint]:
    return []


def _default_tasks() -> list[TaskRecord]:
    return []


def _default_edges() -> list[DependencyEdge]:
    return []


@dataclass
class Snapshot:
    """Complete point-in-time copy of the records the engine reads."""

    projects: list[Project] = field(default_factory=_default_projects)
    sprints: list[Sprint] = field(default_factory=_default_sprints)
    tasks: list[TaskRecord] = field(default_factory=_default_tasks)
    dependencies: list[DependencyEdge] = field(default_factory=_default_edges)


class InMemoryTaskStore:
    """``TaskStore`` over a ``Snapshot``.

    Task order in the snapshot is treated as creation order. Each task's
    ``depends_on`` list is filled from the dependency edges unless the record
    already carries one.
    """

    def __init__(self, snapshot: Snapshot):
        self.snapshot = snapshot
        self._projects = {p.id: p for p in snapshot.projects}
        self._sprints = {s.id: s for s in snapshot.sprints}
        self._task_project = {t.id: t.project_id for t in snapshot.tasks}

        blocking_by_dependent: dict[str, list[str]] = {}
        for edge in snapshot.dependencies:
            blocking_by_dependent.setdefault(edge.dependent_task_id, []).append(
                edge.blocking_task_id
            )
        for task in snapshot.tasks:
            if not task.depends_on:
                task.depends_on = list(blocking_by_dependent.get(task.id, []))

    def get_project(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    def list_project_tasks(self, project_id: str) -> list[TaskRecord]:
        return [t for t in self.snapshot.tasks if t.project_id == project_id]

    def list_project_sprints(self, project_id: str) -> list[Sprint]:
        return [s for s in self.snapshot.sprints if s.project_id == project_id]

    def list_project_dependencies(self, project_id: str) -> list[DependencyEdge]:
        return [
            edge
            for edge in self.snapshot.dependencies
            if self._task_project.get(edge.dependent_task_id) == project_id
        ]

    def get_sprint(self, sprint_id: str) -> Sprint | None:
        return self._sprints.get(sprint_id)

    def list_sprint_tasks(self, sprint_id: str) -> list[TaskRecord]:
        return [t for t in self.snapshot.tasks if t.sprint_id == sprint_id]

    def list_scheduled_assigned_tasks(self, project_id: str) -> list[TaskRecord]:
        return [
            t
            for t in self.list_project_tasks(project_id)
            if t.assignee is not None and t.start_date is not None and t.due_date is not None
        ]
