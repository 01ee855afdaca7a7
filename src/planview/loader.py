"""Snapshot loading with config discovery and reference validation."""

from __future__ import annotations

from pathlib import Path

from .config import CONFIG_FILENAME, PlanviewConfig, load_config
from .exceptions import ValidationError
from .parser import SnapshotParser
from .store import Snapshot


def discover_config(
    snapshot_path: Path | str | None = None,
    config_path: Path | None = None,
) -> PlanviewConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument (must exist)
    2. Snapshot directory / planview_config.yaml
    3. Current directory / planview_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    if snapshot_path is not None:
        dir_config = Path(snapshot_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return PlanviewConfig()


def load_snapshot(path: Path | str) -> Snapshot:
    """Parse and validate a snapshot file.

    Args:
        path: Path to the snapshot YAML or JSON file

    Returns:
        Snapshot ready to back an InMemoryTaskStore
    """
    snapshot = SnapshotParser().parse_file(path)
    validate_snapshot(snapshot)
    return snapshot


def _check_unique(kind: str, ids: list[str]) -> None:
    seen: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            raise ValidationError(f"Duplicate {kind} id: {item_id}")
        seen.add(item_id)


def validate_snapshot(snapshot: Snapshot) -> None:
    """Validate id uniqueness and record references.

    Parent-task references are deliberately not checked: a dangling parent
    makes the task a root in the hierarchy instead of failing the load.
    """
    _check_unique("project", [p.id for p in snapshot.projects])
    _check_unique("sprint", [s.id for s in snapshot.sprints])
    _check_unique("task", [t.id for t in snapshot.tasks])

    project_ids = {p.id for p in snapshot.projects}
    sprint_ids = {s.id for s in snapshot.sprints}
    task_ids = {t.id for t in snapshot.tasks}

    for sprint in snapshot.sprints:
        if sprint.project_id not in project_ids:
            raise ValidationError(
                f"Sprint {sprint.id} belongs to unknown project: {sprint.project_id}"
            )

    for task in snapshot.tasks:
        if task.project_id not in project_ids:
            raise ValidationError(f"Task {task.id} belongs to unknown project: {task.project_id}")
        if task.sprint_id is not None and task.sprint_id not in sprint_ids:
            raise ValidationError(f"Task {task.id} references unknown sprint: {task.sprint_id}")

    for edge in snapshot.dependencies:
        for task_id in (edge.blocking_task_id, edge.dependent_task_id):
            if task_id not in task_ids:
                raise ValidationError(
                    f"Dependency {edge.blocking_task_id} -> {edge.dependent_task_id} "
                    f"references unknown task: {task_id}"
                )
