"""Dependency graph construction."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import DependencyEdge


class DependencyGraph:
    """Adjacency view over blocking -> dependent edges.

    Successor lists keep the order in which edges were supplied, which is
    what makes tie-breaking in the critical-path walk reproducible.
    """

    def __init__(self, edges: Iterable[DependencyEdge] = ()):
        self._successors: dict[str, list[str]] = {}
        self._predecessors: dict[str, list[str]] = {}
        for edge in edges:
            self.add_edge(edge.blocking_task_id, edge.dependent_task_id)

    def add_edge(self, blocking_id: str, dependent_id: str) -> None:
        """Record that ``blocking_id`` must finish before ``dependent_id``."""
        self._successors.setdefault(blocking_id, []).append(dependent_id)
        self._predecessors.setdefault(dependent_id, []).append(blocking_id)

    def successors(self, task_id: str) -> list[str]:
        """Tasks directly blocked by ``task_id``, in edge order."""
        return self._successors.get(task_id, [])

    def predecessors(self, task_id: str) -> list[str]:
        """Tasks directly blocking ``task_id``, in edge order."""
        return self._predecessors.get(task_id, [])

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._successors.values())
