"""Tests for Mermaid gantt rendering."""

from datetime import date

from planview.mermaid import GanttChartRenderer, mermaid_id, render_mermaid
from planview.models import Assignee, Milestone, MilestoneKind, ScheduleData, Timeline
from tests.conftest import gantt_task, utc


def _schedule() -> ScheduleData:
    done = gantt_task("a", start=utc(2025, 1, 6), end=utc(2025, 1, 10), progress=100)
    done.assignee = Assignee(id="u1", name="Ada Lovelace")
    active = gantt_task("b", start=utc(2025, 1, 10), end=utc(2025, 1, 10), progress=50)
    undated = gantt_task("c", start=utc(2025, 1, 12))
    child = gantt_task("sub-task", parent="a", start=utc(2025, 1, 7), end=utc(2025, 1, 8, 12))
    done.children = [child]
    return ScheduleData(
        tasks=[done, active, undated],
        timeline=Timeline(start=utc(2025, 1, 6), end=utc(2025, 1, 19), duration_days=13),
        critical_path=["a", "b"],
        milestones=[
            Milestone(
                id="s1",
                title="Sprint 1 Start",
                date=utc(2025, 1, 6),
                kind=MilestoneKind.SPRINT_START,
            ),
            Milestone(id="s1_end", title="Sprint 1 End", date=None, kind=MilestoneKind.SPRINT_END),
        ],
    )


class TestRenderMermaid:
    """Test the rendered chart."""

    def test_header(self) -> None:
        """The chart opens with frontmatter and the gantt header."""
        output = render_mermaid(_schedule(), title="Sprint Plan", today=date(2025, 1, 8))

        assert output.startswith("---\nconfig:\n    gantt:\n        topAxis: true\n---\ngantt\n")
        assert "    title Sprint Plan" in output
        assert "    dateFormat YYYY-MM-DD" in output
        assert "    todayMarker 2025-01-08" in output

    def test_task_lines(self) -> None:
        """Dated tasks are listed with status and critical tags."""
        output = render_mermaid(_schedule(), today=date(2025, 1, 8))

        assert "    section Tasks" in output
        assert "    Task a (Ada Lovelace) :done, crit, a, 2025-01-06, 4d" in output
        assert "    Task b :active, crit, b, 2025-01-10, 1d" in output

    def test_children_are_listed(self) -> None:
        """Nested tasks are rendered after their parent with safe ids."""
        output = render_mermaid(_schedule(), today=date(2025, 1, 8))
        lines = output.splitlines()

        child_line = "    Task sub-task :sub_task, 2025-01-07, 2d"
        assert child_line in lines
        assert lines.index(child_line) == lines.index(
            "    Task a (Ada Lovelace) :done, crit, a, 2025-01-06, 4d"
        ) + 1

    def test_undated_tasks_are_skipped(self) -> None:
        """Tasks missing either date do not appear."""
        output = render_mermaid(_schedule(), today=date(2025, 1, 8))

        assert "Task c" not in output

    def test_milestones(self) -> None:
        """Only dated milestones are rendered."""
        output = render_mermaid(_schedule(), today=date(2025, 1, 8))

        assert "    section Milestones" in output
        assert "    Sprint 1 Start :milestone, ms_s1, 2025-01-06, 0d" in output
        assert "Sprint 1 End" not in output

    def test_critical_marking_disabled(self) -> None:
        """With mark_critical off no task is tagged crit."""
        output = render_mermaid(_schedule(), mark_critical=False, today=date(2025, 1, 8))

        assert "crit" not in output
        assert "    Task a (Ada Lovelace) :done, a, 2025-01-06, 4d" in output

    def test_empty_schedule_has_no_sections(self) -> None:
        """A schedule without dated entries renders only the header."""
        data = ScheduleData(
            tasks=[],
            timeline=Timeline(start=utc(2025, 1, 1), end=utc(2025, 1, 31), duration_days=30),
            critical_path=[],
            milestones=[],
        )

        output = GanttChartRenderer(today=date(2025, 1, 1)).render(data)

        assert "section" not in output
        assert "    title Project Schedule" in output


def test_labels_are_escaped() -> None:
    """Characters with meaning in task syntax are removed from labels."""
    task = gantt_task("t", start=utc(2025, 1, 1), end=utc(2025, 1, 2))
    task.title = "Fix: login #1; now"
    data = ScheduleData(
        tasks=[task],
        timeline=Timeline(start=utc(2025, 1, 1), end=utc(2025, 1, 2), duration_days=1),
        critical_path=[],
        milestones=[],
    )

    output = render_mermaid(data, today=date(2025, 1, 1))

    assert "    Fix - login 1, now :t, 2025-01-01, 1d" in output


def test_mermaid_id() -> None:
    """Non-word characters become underscores."""
    assert mermaid_id("PLAT-12.a") == "PLAT_12_a"
    assert mermaid_id("ok_id") == "ok_id"


def test_ids_are_unique_across_tasks_and_milestones() -> None:
    """Colliding task ids and sprint ids still get distinct chart ids."""
    dashed = gantt_task("a-b", start=utc(2025, 1, 1), end=utc(2025, 1, 2))
    underscored = gantt_task("a_b", start=utc(2025, 1, 3), end=utc(2025, 1, 4))
    named_like_sprint = gantt_task("s1", start=utc(2025, 1, 5), end=utc(2025, 1, 6))
    data = ScheduleData(
        tasks=[dashed, underscored, named_like_sprint],
        timeline=Timeline(start=utc(2025, 1, 1), end=utc(2025, 1, 6), duration_days=5),
        critical_path=[],
        milestones=[
            Milestone(
                id="s1",
                title="Sprint 1 Start",
                date=utc(2025, 1, 1),
                kind=MilestoneKind.SPRINT_START,
            )
        ],
    )

    output = render_mermaid(data, today=date(2025, 1, 1))

    assert "    Task a-b :a_b, 2025-01-01, 1d" in output
    assert "    Task a_b :a_b_2, 2025-01-03, 1d" in output
    assert "    Task s1 :s1, 2025-01-05, 1d" in output
    assert "    Sprint 1 Start :milestone, ms_s1, 2025-01-01, 0d" in output
