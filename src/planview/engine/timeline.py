"""Timeline aggregation over task and range dates."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from ..models import DateRange, GanttTask, Timeline

DEFAULT_FALLBACK_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60


def duration_in_days(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounding any partial day up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def collect_dates(
    tasks: Iterable[GanttTask], date_range: DateRange | None = None
) -> list[datetime]:
    """Gather the date pool a timeline is computed from.

    Only tasks with both a start and an end contribute; a task with a single
    date is left out entirely. The explicit range adds whichever bounds it has.
    """
    pool: list[datetime] = []
    for task in tasks:
        if task.start is not None and task.end is not None:
            pool.extend([task.start, task.end])
    if date_range is not None:
        if date_range.start is not None:
            pool.append(date_range.start)
        if date_range.end is not None:
            pool.append(date_range.end)
    return pool


def calculate_timeline(
    tasks: Iterable[GanttTask],
    date_range: DateRange | None = None,
    *,
    now: datetime | None = None,
    fallback_days: int = DEFAULT_FALLBACK_DAYS,
) -> Timeline:
    """Compute the overall window of a schedule.

    Args:
        tasks: Flat list of Gantt tasks
        date_range: Optional project or sprint bounds merged into the pool
        now: Reference time for the empty fallback (defaults to the current UTC time)
        fallback_days: Window length when no dates are available at all

    Returns:
        Timeline spanning the earliest and latest known dates, or
        ``now .. now + fallback_days`` when nothing is known
    """
    pool = collect_dates(tasks, date_range)

    if not pool:
        start = now or datetime.now(timezone.utc)
        return Timeline(
            start=start,
            end=start + timedelta(days=fallback_days),
            duration_days=fallback_days,
        )

    start = min(pool)
    end = max(pool)
    return Timeline(start=start, end=end, duration_days=duration_in_days(start, end))
