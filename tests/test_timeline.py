"""Tests for timeline aggregation."""

from datetime import timedelta

import pytest

from planview.engine.timeline import calculate_timeline, collect_dates, duration_in_days
from planview.models import DateRange
from tests.conftest import gantt_task, utc


class TestCalculateTimeline:
    """Test calculate_timeline."""

    def test_empty_input_falls_back_to_thirty_days(self) -> None:
        """No dates anywhere gives now .. now + 30 days."""
        now = utc(2025, 6, 1, 12)

        timeline = calculate_timeline([], now=now)

        assert timeline.start == now
        assert timeline.end - timeline.start == timedelta(days=30)
        assert timeline.duration_days == 30

    def test_empty_input_without_now_uses_current_time(self) -> None:
        """The fallback window is anchored on the current time."""
        timeline = calculate_timeline([gantt_task("a")])

        assert timeline.duration_days == 30
        assert timeline.end - timeline.start == timedelta(days=30)
        assert timeline.start.tzinfo is not None

    def test_fallback_days_configurable(self) -> None:
        """The fallback window length can be changed."""
        timeline = calculate_timeline([], now=utc(2025, 1, 1), fallback_days=14)

        assert timeline.end == utc(2025, 1, 15)
        assert timeline.duration_days == 14

    def test_min_and_max_across_tasks(self) -> None:
        """Start and end come from the earliest and latest task dates."""
        tasks = [
            gantt_task("a", start=utc(2025, 1, 10), end=utc(2025, 1, 20)),
            gantt_task("b", start=utc(2025, 1, 5), end=utc(2025, 1, 12)),
        ]

        timeline = calculate_timeline(tasks)

        assert timeline.start == utc(2025, 1, 5)
        assert timeline.end == utc(2025, 1, 20)
        assert timeline.duration_days == 15

    def test_tasks_with_single_date_are_ignored(self) -> None:
        """A task with only a start or only an end contributes nothing."""
        tasks = [
            gantt_task("both", start=utc(2025, 2, 1), end=utc(2025, 2, 3)),
            gantt_task("start_only", start=utc(2024, 1, 1)),
            gantt_task("end_only", end=utc(2026, 1, 1)),
        ]

        timeline = calculate_timeline(tasks)

        assert timeline.start == utc(2025, 2, 1)
        assert timeline.end == utc(2025, 2, 3)

    def test_only_single_dates_falls_back(self) -> None:
        """Tasks with one date each leave the pool empty."""
        now = utc(2025, 3, 1)

        timeline = calculate_timeline([gantt_task("a", start=utc(2025, 1, 1))], now=now)

        assert timeline.start == now
        assert timeline.duration_days == 30

    def test_explicit_range_widens_window(self) -> None:
        """Project or sprint bounds are merged into the pool."""
        tasks = [gantt_task("a", start=utc(2025, 1, 10), end=utc(2025, 1, 20))]

        timeline = calculate_timeline(tasks, DateRange(start=utc(2025, 1, 1), end=utc(2025, 2, 1)))

        assert timeline.start == utc(2025, 1, 1)
        assert timeline.end == utc(2025, 2, 1)
        assert timeline.duration_days == 31

    def test_range_with_only_end(self) -> None:
        """A range bound alone is enough to avoid the fallback."""
        timeline = calculate_timeline([], DateRange(end=utc(2025, 4, 1)))

        assert timeline.start == timeline.end == utc(2025, 4, 1)
        assert timeline.duration_days == 0

    def test_partial_day_rounds_up(self) -> None:
        """Duration is the ceiling of elapsed days."""
        tasks = [gantt_task("a", start=utc(2025, 1, 1), end=utc(2025, 1, 3, 1))]

        timeline = calculate_timeline(tasks)

        assert timeline.duration_days == 3

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [(0, 0), (1, 1), (24, 1), (25, 2), (24 * 7, 7)],
    )
    def test_duration_in_days(self, hours: int, expected: int) -> None:
        """duration_in_days rounds partial days up."""
        start = utc(2025, 1, 1)

        assert duration_in_days(start, start + timedelta(hours=hours)) == expected


def test_collect_dates_order() -> None:
    """The pool lists task dates before the range bounds."""
    tasks = [gantt_task("a", start=utc(2025, 1, 2), end=utc(2025, 1, 3))]

    pool = collect_dates(tasks, DateRange(start=utc(2025, 1, 1)))

    assert pool == [utc(2025, 1, 2), utc(2025, 1, 3), utc(2025, 1, 1)]
