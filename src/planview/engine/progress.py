"""Status name to completion percentage."""

from __future__ import annotations

# Exact, case-sensitive status names; anything else counts as not started
STATUS_PROGRESS: dict[str, int] = {
    "To Do": 0,
    "TODO": 0,
    "Backlog": 0,
    "In Progress": 50,
    "IN_PROGRESS": 50,
    "Review": 80,
    "REVIEW": 80,
    "Testing": 90,
    "TESTING": 90,
    "Done": 100,
    "DONE": 100,
    "Completed": 100,
    "COMPLETED": 100,
}


def map_progress(status_name: str | None) -> int:
    """Map a status display name to a progress percentage (0 when unknown)."""
    if status_name is None:
        return 0
    return STATUS_PROGRESS.get(status_name, 0)
