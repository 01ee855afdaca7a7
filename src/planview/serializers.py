"""JSON-ready dict conversion for schedule results.

Keys follow the camelCase wire shape the web client consumes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .models import (
    Assignee,
    GanttTask,
    Milestone,
    ResourceAllocation,
    ScheduleData,
    TaskStatus,
    Timeline,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def assignee_to_dict(assignee: Assignee | None) -> dict[str, Any] | None:
    """Convert an assignee, keeping avatar only when set."""
    if assignee is None:
        return None
    result: dict[str, Any] = {"id": assignee.id, "name": assignee.name}
    if assignee.avatar:
        result["avatar"] = assignee.avatar
    return result


def status_to_dict(status: TaskStatus | None) -> dict[str, Any] | None:
    """Convert a task status; a task without one serializes to null."""
    if status is None:
        return None
    return {"name": status.name, "color": status.color}


def gantt_task_to_dict(task: GanttTask) -> dict[str, Any]:
    """Convert a Gantt task and, recursively, its children."""
    result: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "start": _iso(task.start),
        "end": _iso(task.end),
        "progress": task.progress,
        "dependencies": list(task.dependencies),
        "assignee": assignee_to_dict(task.assignee),
        "priority": task.priority,
        "status": status_to_dict(task.status),
        "type": task.type,
        "key": task.key,
    }
    if task.parent:
        result["parent"] = task.parent
    if task.children:
        result["children"] = [gantt_task_to_dict(child) for child in task.children]
    return result


def timeline_to_dict(timeline: Timeline) -> dict[str, Any]:
    """Convert a timeline; ``duration`` is in whole days."""
    return {
        "start": timeline.start.isoformat(),
        "end": timeline.end.isoformat(),
        "duration": timeline.duration_days,
    }


def milestone_to_dict(milestone: Milestone) -> dict[str, Any]:
    """Convert a milestone."""
    return {
        "id": milestone.id,
        "title": milestone.title,
        "date": _iso(milestone.date),
        "type": milestone.kind.value,
    }


def schedule_to_dict(data: ScheduleData) -> dict[str, Any]:
    """Convert a project or sprint schedule."""
    return {
        "tasks": [gantt_task_to_dict(task) for task in data.tasks],
        "timeline": timeline_to_dict(data.timeline),
        "criticalPath": list(data.critical_path),
        "milestones": [milestone_to_dict(m) for m in data.milestones],
    }


def allocation_to_dict(allocations: list[ResourceAllocation]) -> list[dict[str, Any]]:
    """Convert a resource allocation view."""
    return [
        {
            "assignee": {
                "id": allocation.assignee.id,
                "name": allocation.assignee.name,
                "avatar": allocation.assignee.avatar,
            },
            "tasks": [
                {
                    "id": task.id,
                    "title": task.title,
                    "start": _iso(task.start),
                    "end": _iso(task.end),
                    "storyPoints": task.story_points,
                }
                for task in allocation.tasks
            ],
            "workload": allocation.workload,
        }
        for allocation in allocations
    ]
