"""Mermaid gantt chart rendering for schedule results."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

from .engine.timeline import duration_in_days
from .models import GanttTask, Milestone, ScheduleData

DONE_PROGRESS = 100
MILESTONE_ID_PREFIX = "ms_"


def mermaid_id(raw_id: str) -> str:
    """Make an identifier safe for Mermaid task references."""
    return re.sub(r"[^A-Za-z0-9_]", "_", raw_id)


def _claim_id(raw_id: str, used: set[str]) -> str:
    """Return a Mermaid id for raw_id not yet in used, and record it."""
    base = mermaid_id(raw_id)
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}_{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _escape_label(label: str) -> str:
    """Strip characters Mermaid treats as task syntax."""
    return label.replace(":", " -").replace("#", "").replace(";", ",")


def _format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


class GanttChartRenderer:
    """Render a ScheduleData as Mermaid gantt syntax."""

    def __init__(
        self,
        *,
        title: str = "Project Schedule",
        mark_critical: bool = True,
        today: date | None = None,
    ):
        """Initialize the renderer.

        Args:
            title: Chart title
            mark_critical: Tag critical-path tasks with ``crit``
            today: Date for the today marker (defaults to the current UTC date)
        """
        self.title = title
        self.mark_critical = mark_critical
        self.today = today or datetime.now(timezone.utc).date()

    def render(self, data: ScheduleData) -> str:
        """Render the chart; tasks without both dates are left out."""
        critical = set(data.critical_path) if self.mark_critical else set()
        # Tasks and milestones share one id namespace in the chart
        used_ids: set[str] = set()

        lines = self._build_frontmatter()
        lines.extend(self._build_header())
        lines.append("")

        task_lines: list[str] = []
        for task in data.all_tasks():
            line = self._format_task(task, critical, used_ids)
            if line is not None:
                task_lines.append(line)
        if task_lines:
            lines.append("    section Tasks")
            lines.extend(task_lines)

        milestone_lines = [
            self._format_milestone(m, used_ids) for m in data.milestones if m.date is not None
        ]
        if milestone_lines:
            lines.append("    section Milestones")
            lines.extend(milestone_lines)

        return "\n".join(lines)

    def _build_frontmatter(self) -> list[str]:
        return [
            "---",
            "config:",
            "    gantt:",
            "        topAxis: true",
            "---",
        ]

    def _build_header(self) -> list[str]:
        return [
            "gantt",
            f"    title {self.title}",
            "    dateFormat YYYY-MM-DD",
            f"    todayMarker {self.today.strftime('%Y-%m-%d')}",
        ]

    def _task_tags(self, task: GanttTask, critical: set[str]) -> list[str]:
        tags: list[str] = []
        if task.progress >= DONE_PROGRESS:
            tags.append("done")
        elif task.progress > 0:
            tags.append("active")
        if task.id in critical:
            tags.append("crit")
        return tags

    def _format_task(
        self, task: GanttTask, critical: set[str], used_ids: set[str]
    ) -> str | None:
        if task.start is None or task.end is None:
            return None

        label = _escape_label(task.title)
        if task.assignee is not None:
            label += f" ({_escape_label(task.assignee.name)})"

        tags = self._task_tags(task, critical)
        tags_str = ", ".join(tags) + ", " if tags else ""
        # A task due on its start day still occupies one day on the chart
        days = max(duration_in_days(task.start, task.end), 1)
        task_id = _claim_id(task.id, used_ids)
        return f"    {label} :{tags_str}{task_id}, {_format_date(task.start)}, {days}d"

    def _format_milestone(self, milestone: Milestone, used_ids: set[str]) -> str:
        assert milestone.date is not None
        milestone_id = _claim_id(MILESTONE_ID_PREFIX + milestone.id, used_ids)
        return (
            f"    {_escape_label(milestone.title)} :milestone, "
            f"{milestone_id}, {_format_date(milestone.date)}, 0d"
        )


def render_mermaid(
    data: ScheduleData,
    *,
    title: str = "Project Schedule",
    mark_critical: bool = True,
    today: date | None = None,
) -> str:
    """Render a schedule as a Mermaid gantt chart."""
    renderer = GanttChartRenderer(title=title, mark_critical=mark_critical, today=today)
    return renderer.render(data)
