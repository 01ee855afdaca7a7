"""Gantt facade: project, sprint and resource-allocation views."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from ..config import PlanviewConfig
from ..exceptions import NotFoundError
from ..logger import get_logger
from ..models import (
    DEFAULT_STORY_POINTS,
    Assignee,
    DateRange,
    GanttTask,
    ResourceAllocation,
    ResourceTask,
    ScheduleData,
    TaskRecord,
    User,
)
from ..store import TaskStore
from .critical_path import calculate_critical_path
from .hierarchy import build_task_hierarchy, find_parent_cycles
from .milestones import generate_milestones, sprint_end_milestone, sprint_start_milestone
from .progress import map_progress
from .timeline import calculate_timeline

# One worker per independent read of a view
PROJECT_FETCH_WORKERS = 4
SPRINT_FETCH_WORKERS = 2


def to_assignee(user: User | None) -> Assignee | None:
    """Project a stored user onto the chart's assignee shape."""
    if user is None:
        return None
    return Assignee(id=user.id, name=user.display_name, avatar=user.avatar or None)


def to_gantt_task(
    task: TaskRecord,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
) -> GanttTask:
    """Build the Gantt projection of a task.

    ``start``/``end`` replace the task's own dates only where those are missing.
    """
    return GanttTask(
        id=task.id,
        title=task.title,
        start=task.start_date or start,
        end=task.due_date or end,
        progress=map_progress(task.status.name if task.status is not None else None),
        dependencies=list(task.depends_on),
        assignee=to_assignee(task.assignee),
        priority=task.priority,
        status=task.status,
        type=task.type,
        key=task.slug,
        parent=task.parent_task_id or None,
    )


class GanttService:
    """Derives schedule views from a task store.

    Every call recomputes from a fresh read of the store; nothing is cached
    between calls.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        config: PlanviewConfig | None = None,
        now: datetime | None = None,
    ):
        """Initialize the service.

        Args:
            store: Source of projects, tasks, sprints and dependency edges
            config: Optional configuration (defaults apply when omitted)
            now: Fixed reference time for empty timelines (defaults to the current time)
        """
        self.store = store
        self.config = config or PlanviewConfig()
        self.now = now
        self.logger = get_logger()

    def get_project_schedule(self, project_id: str) -> ScheduleData:
        """Build the project view: nested tasks, timeline, critical path, milestones.

        Raises:
            NotFoundError: If the project does not exist
        """
        with ThreadPoolExecutor(max_workers=PROJECT_FETCH_WORKERS) as executor:
            project_future = executor.submit(self.store.get_project, project_id)
            tasks_future = executor.submit(self.store.list_project_tasks, project_id)
            sprints_future = executor.submit(self.store.list_project_sprints, project_id)
            edges_future = executor.submit(self.store.list_project_dependencies, project_id)

            project = project_future.result()
            tasks = tasks_future.result()
            sprints = sprints_future.result()
            edges = edges_future.result()

        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")

        self.logger.checks(
            "Project %s: %d task(s), %d sprint(s), %d dependency edge(s)",
            project_id,
            len(tasks),
            len(sprints),
            len(edges),
        )

        gantt_tasks = [to_gantt_task(task) for task in tasks]

        if self.config.hierarchy.detect_cycles:
            cyclic = find_parent_cycles(gantt_tasks)
            if cyclic:
                self.logger.warning(
                    "Parent cycle in project %s, tasks not reachable from the roots: %s",
                    project_id,
                    ", ".join(cyclic),
                )

        root_tasks = build_task_hierarchy(gantt_tasks)
        timeline = calculate_timeline(
            gantt_tasks,
            DateRange(start=project.start_date, end=project.end_date),
            now=self.now,
            fallback_days=self.config.timeline.fallback_days,
        )
        critical_path = calculate_critical_path(
            gantt_tasks, edges, strategy=self.config.critical_path.strategy
        )
        milestones = generate_milestones(sprints)

        self.logger.changes(
            "Project %s timeline %s .. %s (%d days), critical path: %s",
            project_id,
            timeline.start.isoformat(),
            timeline.end.isoformat(),
            timeline.duration_days,
            " -> ".join(critical_path) or "(none)",
        )

        return ScheduleData(
            tasks=root_tasks,
            timeline=timeline,
            critical_path=critical_path,
            milestones=milestones,
        )

    def get_sprint_schedule(self, sprint_id: str) -> ScheduleData:
        """Build the sprint view: flat tasks dated by the sprint where missing.

        Dependency edges are not loaded for this view, so the critical path is
        at most one task long.

        Raises:
            NotFoundError: If the sprint does not exist
        """
        with ThreadPoolExecutor(max_workers=SPRINT_FETCH_WORKERS) as executor:
            sprint_future = executor.submit(self.store.get_sprint, sprint_id)
            tasks_future = executor.submit(self.store.list_sprint_tasks, sprint_id)

            sprint = sprint_future.result()
            tasks = tasks_future.result()

        if sprint is None:
            raise NotFoundError(f"Sprint not found: {sprint_id}")

        self.logger.checks("Sprint %s: %d task(s)", sprint_id, len(tasks))

        gantt_tasks = [
            to_gantt_task(task, start=sprint.start_date, end=sprint.end_date) for task in tasks
        ]
        timeline = calculate_timeline(
            gantt_tasks,
            DateRange(start=sprint.start_date, end=sprint.end_date),
            now=self.now,
            fallback_days=self.config.timeline.fallback_days,
        )
        critical_path = calculate_critical_path(
            gantt_tasks, [], strategy=self.config.critical_path.strategy
        )

        self.logger.changes(
            "Sprint %s timeline %s .. %s (%d days)",
            sprint_id,
            timeline.start.isoformat(),
            timeline.end.isoformat(),
            timeline.duration_days,
        )

        return ScheduleData(
            tasks=gantt_tasks,
            timeline=timeline,
            critical_path=critical_path,
            milestones=[sprint_start_milestone(sprint), sprint_end_milestone(sprint)],
        )

    def get_resource_allocation(self, project_id: str) -> list[ResourceAllocation]:
        """Group a project's dated, assigned tasks by assignee and sum their story points.

        An unknown project simply has no tasks, so the result is empty.
        """
        tasks = self.store.list_scheduled_assigned_tasks(project_id)
        self.logger.checks("Project %s: %d assigned task(s) with dates", project_id, len(tasks))

        allocations: dict[str, ResourceAllocation] = {}
        for task in tasks:
            assignee = to_assignee(task.assignee)
            if assignee is None:
                continue

            allocation = allocations.get(assignee.id)
            if allocation is None:
                allocation = ResourceAllocation(assignee=assignee)
                allocations[assignee.id] = allocation

            story_points = task.story_points or DEFAULT_STORY_POINTS
            allocation.tasks.append(
                ResourceTask(
                    id=task.id,
                    title=task.title,
                    start=task.start_date,
                    end=task.due_date,
                    story_points=story_points,
                )
            )
            allocation.workload += story_points

        for allocation in allocations.values():
            self.logger.changes(
                "%s: %d task(s), workload %d",
                allocation.assignee.name,
                len(allocation.tasks),
                allocation.workload,
            )

        return list(allocations.values())
