"""Critical-path estimation over the task dependency graph.

The "critical path" here is the longest chain of dependent tasks counted in
hops, starting from a task that has no recorded predecessor. Task durations
and float are not considered, so this is a structural estimate rather than a
CPM result.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..config import CriticalPathStrategy
from ..logger import debug_enabled, get_logger
from ..models import DependencyEdge, GanttTask
from .graph import DependencyGraph


class CriticalPathEstimator:
    """Find the longest dependency chain among a set of tasks.

    Roots are the tasks whose own ``dependencies`` list is empty. From each
    root the walk follows edges where the current task is the blocking side,
    ignoring edges that lead to tasks outside ``tasks``. At every node the
    first longest child chain wins, and across roots the first longest chain
    wins, so ties resolve by input and edge order.

    An edge leading back into the chain currently being walked is not
    followed, so cyclic input terminates instead of recursing forever.
    """

    def __init__(
        self,
        tasks: list[GanttTask],
        edges: list[DependencyEdge],
        *,
        strategy: CriticalPathStrategy = CriticalPathStrategy.MEMOIZED,
    ):
        self.tasks = tasks
        self.graph = DependencyGraph(edges)
        self.strategy = strategy
        self._task_ids = {task.id for task in tasks}
        self._logger = get_logger()

    def roots(self) -> list[GanttTask]:
        """Tasks with no direct predecessor, in input order."""
        return [task for task in self.tasks if not task.dependencies]

    def estimate(self) -> list[str]:
        """Return the longest chain as an ordered list of task ids."""
        roots = self.roots()
        if not roots:
            return []

        if self.strategy == CriticalPathStrategy.RECURSIVE:
            longest_from = self._recursive_longest_from
        else:
            memo = self._memoized_paths([root.id for root in roots])
            longest_from = memo.__getitem__

        longest: list[str] = []
        for root in roots:
            path = longest_from(root.id)
            if len(path) > len(longest):
                longest = path
        return longest

    def _dependents(self, task_id: str) -> Iterator[str]:
        for dependent_id in self.graph.successors(task_id):
            if dependent_id in self._task_ids:
                yield dependent_id

    def _skip_cycle(self, task_id: str, dependent_id: str) -> None:
        self._logger.warning(
            "Dependency cycle: %s -> %s leads back into the current chain, not followed",
            task_id,
            dependent_id,
        )

    def _recursive_longest_from(
        self, task_id: str, chain: frozenset[str] = frozenset()
    ) -> list[str]:
        """Walk every path from ``task_id`` without caching shared descendants."""
        chain = chain | {task_id}
        longest_sub: list[str] = []
        for dependent_id in self._dependents(task_id):
            if dependent_id in chain:
                self._skip_cycle(task_id, dependent_id)
                continue
            sub_path = self._recursive_longest_from(dependent_id, chain)
            if len(sub_path) > len(longest_sub):
                longest_sub = sub_path
        return [task_id, *longest_sub]

    def _memoized_paths(self, root_ids: list[str]) -> dict[str, list[str]]:
        """Longest chain from every task reachable from the roots.

        Iterative post-order DFS, so long chains don't hit the recursion limit.
        A task's entry is cached the first time it is finished, even when an
        edge was cut there by the cycle guard, so on cyclic input the result
        depends on traversal order and may differ from the recursive walk.
        """
        memo: dict[str, list[str]] = {}
        for root_id in root_ids:
            if root_id in memo:
                continue
            stack: list[tuple[str, Iterator[str]]] = [(root_id, self._dependents(root_id))]
            on_stack = {root_id}
            while stack:
                task_id, pending = stack[-1]
                descended = False
                for dependent_id in pending:
                    if dependent_id in memo:
                        continue
                    if dependent_id in on_stack:
                        self._skip_cycle(task_id, dependent_id)
                        continue
                    stack.append((dependent_id, self._dependents(dependent_id)))
                    on_stack.add(dependent_id)
                    descended = True
                    break
                if descended:
                    continue

                stack.pop()
                on_stack.discard(task_id)
                longest_sub: list[str] = []
                for dependent_id in self._dependents(task_id):
                    sub_path = memo.get(dependent_id)
                    if sub_path is not None and len(sub_path) > len(longest_sub):
                        longest_sub = sub_path
                memo[task_id] = [task_id, *longest_sub]
                if debug_enabled():
                    self._logger.debug(
                        "Longest chain from %s: %d task(s)", task_id, len(memo[task_id])
                    )
        return memo


def calculate_critical_path(
    tasks: list[GanttTask],
    edges: list[DependencyEdge],
    *,
    strategy: CriticalPathStrategy = CriticalPathStrategy.MEMOIZED,
) -> list[str]:
    """Return the longest hop-count dependency chain (empty when no task is a root)."""
    return CriticalPathEstimator(tasks, edges, strategy=strategy).estimate()
