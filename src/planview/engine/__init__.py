"""Scheduling engine - derives Gantt views from task store snapshots.

Main entry points:
- GanttService: project view, sprint view and resource allocation
- build_task_hierarchy: flat tasks into a parent/child forest
- calculate_timeline: overall date window of a schedule
- calculate_critical_path: longest hop-count dependency chain
- generate_milestones: sprint start/end markers
- map_progress: status name to completion percentage
"""

from .critical_path import CriticalPathEstimator, calculate_critical_path
from .graph import DependencyGraph
from .hierarchy import build_task_hierarchy, find_parent_cycles
from .milestones import generate_milestones, sprint_end_milestone, sprint_start_milestone
from .progress import STATUS_PROGRESS, map_progress
from .service import GanttService, to_gantt_task
from .timeline import calculate_timeline, collect_dates, duration_in_days

__all__ = [
    # Facade
    "GanttService",
    "to_gantt_task",
    # Graph and hierarchy
    "DependencyGraph",
    "build_task_hierarchy",
    "find_parent_cycles",
    # Timeline
    "calculate_timeline",
    "collect_dates",
    "duration_in_days",
    # Critical path
    "CriticalPathEstimator",
    "calculate_critical_path",
    # Milestones
    "generate_milestones",
    "sprint_start_milestone",
    "sprint_end_milestone",
    # Progress
    "STATUS_PROGRESS",
    "map_progress",
]
