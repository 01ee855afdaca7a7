"""Data models for planview.

Input records (``TaskRecord``, ``DependencyEdge``, ``Sprint``, ``Project``) are
read-only snapshots handed over by a task store. Everything else is derived per
request by the engine and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# Story-point weight used for workload when a task has none
DEFAULT_STORY_POINTS = 1


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOWEST = "LOWEST"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    HIGHEST = "HIGHEST"


class TaskType(str, Enum):
    """Kinds of work item."""

    TASK = "TASK"
    BUG = "BUG"
    EPIC = "EPIC"
    STORY = "STORY"
    SUBTASK = "SUBTASK"


class DependencyType(str, Enum):
    """Dependency edge types.

    The engine traverses every type as "blocking task before dependent task".
    """

    BLOCKS = "BLOCKS"
    FINISH_START = "FINISH_START"
    START_START = "START_START"
    FINISH_FINISH = "FINISH_FINISH"
    START_FINISH = "START_FINISH"


class SprintStatus(str, Enum):
    """Sprint lifecycle states."""

    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MilestoneKind(str, Enum):
    """Kinds of derived milestone."""

    SPRINT_START = "sprint_start"
    SPRINT_END = "sprint_end"
    PROJECT_MILESTONE = "project_milestone"


def _default_str_list() -> list[str]:
    return []


def _default_gantt_tasks() -> list[GanttTask]:
    return []


@dataclass(frozen=True)
class TaskStatus:
    """Status name and display color of a task."""

    name: str
    color: str = ""


@dataclass(frozen=True)
class User:
    """A project member as stored."""

    id: str
    first_name: str = ""
    last_name: str = ""
    avatar: str | None = None

    @property
    def display_name(self) -> str:
        """Full name as shown on the chart."""
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Project:
    """Project projection used by the engine."""

    id: str
    name: str
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class Sprint:
    """Sprint projection used by the engine."""

    id: str
    name: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: SprintStatus = SprintStatus.PLANNING
    project_id: str | None = None


@dataclass(frozen=True)
class DependencyEdge:
    """Directed edge: ``blocking_task_id`` must finish before ``dependent_task_id``."""

    dependent_task_id: str
    blocking_task_id: str
    type: DependencyType = DependencyType.FINISH_START


@dataclass
class TaskRecord:
    """A task as read from the task store."""

    id: str
    title: str
    status: TaskStatus | None = None  # None when the task has no status yet
    priority: str = TaskPriority.MEDIUM.value
    type: str = TaskType.TASK.value
    slug: str = ""
    start_date: datetime | None = None
    due_date: datetime | None = None
    parent_task_id: str | None = None
    assignee: User | None = None
    story_points: int | None = None
    project_id: str | None = None
    sprint_id: str | None = None
    depends_on: list[str] = field(default_factory=_default_str_list)  # Blocking task ids


@dataclass(frozen=True)
class Assignee:
    """Assignee as rendered on a Gantt task."""

    id: str
    name: str
    avatar: str | None = None


@dataclass
class GanttTask:
    """A task enriched with derived progress and, for project views, children."""

    id: str
    title: str
    start: datetime | None
    end: datetime | None
    progress: int
    dependencies: list[str]
    assignee: Assignee | None
    priority: str
    status: TaskStatus | None
    type: str
    key: str
    parent: str | None = None
    children: list[GanttTask] = field(default_factory=_default_gantt_tasks)

    def walk(self) -> list[GanttTask]:
        """Return this task followed by all descendants, depth first."""
        result = [self]
        for child in self.children:
            result.extend(child.walk())
        return result


@dataclass(frozen=True)
class DateRange:
    """Explicit start/end bounds (a project's or a sprint's own dates)."""

    start: datetime | None = None
    end: datetime | None = None


@dataclass(frozen=True)
class Timeline:
    """Overall time window of a schedule."""

    start: datetime
    end: datetime
    duration_days: int


@dataclass(frozen=True)
class Milestone:
    """A derived sprint-boundary marker.

    ``date`` is only None for the sprint view of a sprint lacking that date.
    """

    id: str
    title: str
    date: datetime | None
    kind: MilestoneKind


@dataclass
class ScheduleData:
    """Result of a project or sprint schedule request."""

    tasks: list[GanttTask]
    timeline: Timeline
    critical_path: list[str]
    milestones: list[Milestone]

    def all_tasks(self) -> list[GanttTask]:
        """Flatten the task forest depth first."""
        result: list[GanttTask] = []
        for task in self.tasks:
            result.extend(task.walk())
        return result


@dataclass(frozen=True)
class ResourceTask:
    """A task counted towards an assignee's workload."""

    id: str
    title: str
    start: datetime | None
    end: datetime | None
    story_points: int


def _default_resource_tasks() -> list[ResourceTask]:
    return []


@dataclass
class ResourceAllocation:
    """Workload of one assignee."""

    assignee: Assignee
    tasks: list[ResourceTask] = field(default_factory=_default_resource_tasks)
    workload: int = 0
