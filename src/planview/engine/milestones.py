"""Milestone generation from sprint boundaries."""

from __future__ import annotations

from ..models import Milestone, MilestoneKind, Sprint


def sprint_start_milestone(sprint: Sprint) -> Milestone:
    """Milestone for the start of a sprint (id is the sprint id)."""
    return Milestone(
        id=sprint.id,
        title=f"{sprint.name} Start",
        date=sprint.start_date,
        kind=MilestoneKind.SPRINT_START,
    )


def sprint_end_milestone(sprint: Sprint) -> Milestone:
    """Milestone for the end of a sprint (id is ``<sprint id>_end``)."""
    return Milestone(
        id=f"{sprint.id}_end",
        title=f"{sprint.name} End",
        date=sprint.end_date,
        kind=MilestoneKind.SPRINT_END,
    )


def generate_milestones(sprints: list[Sprint]) -> list[Milestone]:
    """Build start/end milestones for every sprint date that is set.

    Returns the milestones sorted by date; equal dates keep sprint order.
    """
    milestones: list[Milestone] = []
    for sprint in sprints:
        if sprint.start_date is not None:
            milestones.append(sprint_start_milestone(sprint))
        if sprint.end_date is not None:
            milestones.append(sprint_end_milestone(sprint))

    return sorted(milestones, key=lambda m: m.date)  # type: ignore[arg-type, return-value]
