"""Pytest configuration and fixtures for planview tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from planview.logger import reset_logger
from planview.models import (
    DependencyEdge,
    GanttTask,
    Project,
    Sprint,
    TaskRecord,
    TaskStatus,
    User,
)
from planview.store import InMemoryTaskStore, Snapshot


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset the planview logger before each test for isolation."""
    reset_logger()


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    """Shorthand for a UTC timestamp."""
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def gantt_task(
    task_id: str,
    *,
    dependencies: list[str] | None = None,
    parent: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    progress: int = 0,
) -> GanttTask:
    """Create a GanttTask with only the fields a test cares about."""
    return GanttTask(
        id=task_id,
        title=f"Task {task_id}",
        start=start,
        end=end,
        progress=progress,
        dependencies=dependencies or [],
        assignee=None,
        priority="MEDIUM",
        status=TaskStatus(name="To Do"),
        type="TASK",
        key=task_id.upper(),
        parent=parent,
    )


def edge(blocking_id: str, dependent_id: str) -> DependencyEdge:
    """Create an edge where ``blocking_id`` blocks ``dependent_id``."""
    return DependencyEdge(dependent_task_id=dependent_id, blocking_task_id=blocking_id)


def task_record(  # noqa: PLR0913 - test factory mirrors TaskRecord
    task_id: str,
    *,
    project_id: str = "p1",
    sprint_id: str | None = None,
    status: str = "To Do",
    start: datetime | None = None,
    due: datetime | None = None,
    parent: str | None = None,
    assignee: User | None = None,
    story_points: int | None = None,
) -> TaskRecord:
    """Create a TaskRecord as a task store would return it."""
    return TaskRecord(
        id=task_id,
        title=f"Task {task_id}",
        status=TaskStatus(name=status, color="#888888"),
        slug=f"P-{task_id}",
        start_date=start,
        due_date=due,
        parent_task_id=parent,
        assignee=assignee,
        story_points=story_points,
        project_id=project_id,
        sprint_id=sprint_id,
    )


ADA = User(id="u1", first_name="Ada", last_name="Lovelace", avatar="ada.png")
GRACE = User(id="u2", first_name="Grace", last_name="Hopper")


@pytest.fixture
def project_store() -> InMemoryTaskStore:
    """A project with a parent task, a dependency chain and two sprints."""
    project = Project(
        id="p1", name="Platform", start_date=utc(2025, 1, 1), end_date=utc(2025, 3, 1)
    )
    sprints = [
        Sprint(
            id="s2",
            name="Sprint 2",
            start_date=utc(2025, 1, 20),
            end_date=utc(2025, 2, 2),
            project_id="p1",
        ),
        Sprint(
            id="s1",
            name="Sprint 1",
            start_date=utc(2025, 1, 6),
            end_date=utc(2025, 1, 19),
            project_id="p1",
        ),
    ]
    tasks = [
        task_record("epic", status="In Progress", start=utc(2025, 1, 6), due=utc(2025, 2, 14)),
        task_record(
            "t1",
            sprint_id="s1",
            status="Done",
            start=utc(2025, 1, 6),
            due=utc(2025, 1, 10),
            parent="epic",
            assignee=ADA,
            story_points=3,
        ),
        task_record(
            "t2",
            sprint_id="s1",
            status="Review",
            start=utc(2025, 1, 13),
            parent="epic",
            assignee=GRACE,
        ),
        task_record(
            "t3", sprint_id="s2", assignee=ADA, start=utc(2025, 1, 20), due=utc(2025, 1, 24)
        ),
    ]
    dependencies = [edge("t1", "t2"), edge("t2", "t3")]
    return InMemoryTaskStore(
        Snapshot(projects=[project], sprints=sprints, tasks=tasks, dependencies=dependencies)
    )
