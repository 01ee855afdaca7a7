"""Task hierarchy (parent/child) construction."""

from __future__ import annotations

from ..models import GanttTask


def build_task_hierarchy(tasks: list[GanttTask]) -> list[GanttTask]:
    """Nest a flat task list into a forest and return the roots.

    A task becomes a root when it has no parent or its parent is not in
    ``tasks``; every other task is appended to its parent's ``children`` in
    input order. This is a single pass with no cycle detection: tasks caught
    in a parent cycle end up nested under each other and unreachable from the
    returned roots. Use ``find_parent_cycles`` to report them.

    Existing ``children`` lists are reset, so calling this twice on the same
    tasks does not duplicate children.
    """
    task_map = {task.id: task for task in tasks}
    for task in tasks:
        task.children = []

    roots: list[GanttTask] = []
    for task in tasks:
        parent = task_map.get(task.parent) if task.parent else None
        if parent is None:
            roots.append(task)
        else:
            parent.children.append(task)
    return roots


def find_parent_cycles(tasks: list[GanttTask]) -> list[str]:
    """Return ids of tasks whose ancestor chain loops back on itself.

    Includes tasks that merely descend from a cycle, since those are equally
    unreachable from the roots. Order follows ``tasks``.
    """
    parent_of = {task.id: task.parent for task in tasks}
    reaches_root: dict[str, bool] = {}

    for task in tasks:
        chain: list[str] = []
        on_chain: set[str] = set()
        current: str | None = task.id
        result = True
        while current is not None and current in parent_of:
            if current in reaches_root:
                result = reaches_root[current]
                break
            if current in on_chain:
                result = False
                break
            chain.append(current)
            on_chain.add(current)
            current = parent_of[current]
        for task_id in chain:
            reaches_root[task_id] = result

    return [task.id for task in tasks if not reaches_root[task.id]]
