"""
Critical path solver.

Edges point from a dependent to its dependency, so compile order flows the
other way: a crate can only start once everything it depends on is done.
The solver walks the reverse adjacency (dependency -> dependents) and, for
each crate, accumulates

    cost(crate) = duration(crate) + max(cost(dependent) for each dependent)

The crate with the highest cost starts the critical path, which then follows
the dependent that achieved each maximum.

Ties are broken by CrateId order: crates and dependents are visited in
ascending id order and a candidate only replaces the current best when its
cost is strictly greater. With no timing at all the path is the single
lexically smallest crate.
"""

from __future__ import annotations

from collections.abc import Iterator

from ...core.interfaces.logger import ILogger
from ...core.models.graph import BuildGraph, CrateId, CriticalPath


class CriticalPathSolver:
    """Computes and records the longest accumulated-duration chain."""

    def __init__(self, logger: ILogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def solve(self, graph: BuildGraph) -> CriticalPath:
        """
        Compute the critical path and write it to ``graph.critical_path``.

        Nodes without a duration contribute zero.

        Args:
            graph: Graph with timing populated on some or all nodes

        Returns:
            The path and its accumulated duration in milliseconds
        """
        if not graph.nodes:
            graph.critical_path = []
            return CriticalPath()

        dependents = self._reverse_adjacency(graph)
        durations = {
            crate_id: node.duration_ms or 0.0 for crate_id, node in graph.nodes.items()
        }

        cost: dict[CrateId, float] = {}
        next_on_path: dict[CrateId, CrateId] = {}

        ordered_ids = sorted(graph.nodes)
        for crate_id in ordered_ids:
            if crate_id not in cost:
                self._accumulate(crate_id, dependents, durations, cost, next_on_path)

        start = ordered_ids[0]
        for crate_id in ordered_ids[1:]:
            if cost[crate_id] > cost[start]:
                start = crate_id

        path = self._walk(start, next_on_path)
        graph.critical_path = path

        self.logger.info(
            "Critical path: %d crates, %.1fms (starts at %s)", len(path), cost[start], start
        )
        return CriticalPath(crates=path, total_ms=cost[start])

    def _reverse_adjacency(self, graph: BuildGraph) -> dict[CrateId, list[CrateId]]:
        """Map each dependency to its sorted, de-duplicated dependents."""
        reverse: dict[CrateId, set[CrateId]] = {}
        for edge in graph.edges:
            reverse.setdefault(edge.to, set()).add(edge.from_)
        return {crate_id: sorted(deps) for crate_id, deps in reverse.items()}

    def _accumulate(
        self,
        root: CrateId,
        dependents: dict[CrateId, list[CrateId]],
        durations: dict[CrateId, float],
        cost: dict[CrateId, float],
        next_on_path: dict[CrateId, CrateId],
    ) -> None:
        """Fill ``cost`` for root and everything reachable from it.

        Uses an explicit stack so long dependency chains cannot exhaust the
        interpreter's recursion limit. A dependent that is still on the stack
        (only possible with a cycle) counts as zero.
        """
        on_stack: set[CrateId] = {root}
        stack: list[tuple[CrateId, Iterator[CrateId]]] = [(root, iter(dependents.get(root, ())))]

        while stack:
            crate_id, pending = stack[-1]

            descended = False
            for dep in pending:
                if dep in cost:
                    continue
                if dep in on_stack:
                    self.logger.warning(
                        "Dependency cycle through %s -> %s, treating as zero cost", crate_id, dep
                    )
                    continue
                on_stack.add(dep)
                stack.append((dep, iter(dependents.get(dep, ()))))
                descended = True
                break
            if descended:
                continue

            stack.pop()
            on_stack.discard(crate_id)

            best_cost = 0.0
            best: CrateId | None = None
            for dep in dependents.get(crate_id, ()):
                dep_cost = cost.get(dep, 0.0)
                if dep_cost > best_cost:
                    best_cost = dep_cost
                    best = dep

            cost[crate_id] = durations.get(crate_id, 0.0) + best_cost
            if best is not None:
                next_on_path[crate_id] = best

    def _walk(self, start: CrateId, next_on_path: dict[CrateId, CrateId]) -> list[CrateId]:
        path = [start]
        seen = {start}
        current = start
        while current in next_on_path:
            current = next_on_path[current]
            if current in seen:
                break
            path.append(current)
            seen.add(current)
        return path
