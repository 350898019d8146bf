"""
Unit tests for CriticalPathSolver.
"""

from unittest.mock import MagicMock

import pytest

from goodtimes.core.models.graph import BuildGraph, CrateNode, DepEdge
from goodtimes.services.graph.critical_path import CriticalPathSolver


def _graph(durations: dict[str, float | None], edges: list[tuple[str, str]]) -> BuildGraph:
    """Graph with one node per key; each edge is (dependent, dependency)."""
    return BuildGraph(
        nodes={
            crate_id: CrateNode(id=crate_id, name=crate_id, version="1.0.0", duration_ms=ms)
            for crate_id, ms in durations.items()
        },
        edges=[DepEdge(from_=a, to=b, dep_kinds=["Normal"]) for a, b in edges],
    )


@pytest.fixture
def solver():
    return CriticalPathSolver(logger=MagicMock())


class TestCriticalPathSolver:
    def test_linear_chain(self, solver):
        # A depends on B, B depends on C
        graph = _graph({"A": 10.0, "B": 20.0, "C": 30.0}, [("A", "B"), ("B", "C")])

        result = solver.solve(graph)

        assert graph.critical_path == ["C", "B", "A"]
        assert result.crates == ["C", "B", "A"]
        assert result.total_ms == 60.0

    def test_picks_heavier_branch(self, solver):
        # core is needed by both a slow and a fast dependent
        graph = _graph(
            {"core": 5.0, "slow": 50.0, "fast": 1.0, "app": 2.0},
            [("slow", "core"), ("fast", "core"), ("app", "slow"), ("app", "fast")],
        )

        result = solver.solve(graph)

        assert result.crates == ["core", "slow", "app"]
        assert result.total_ms == 57.0

    def test_diamond_tie_is_deterministic(self, solver):
        def build():
            return _graph(
                {"A": 1.0, "B": 5.0, "C": 5.0, "D": 2.0},
                [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")],
            )

        first, second = build(), build()
        solver.solve(first)
        solver.solve(second)

        assert first.critical_path == second.critical_path
        # ties go to the lexically smallest id
        assert first.critical_path == ["D", "B", "A"]

    def test_parallel_edges_not_double_counted(self, solver):
        graph = _graph({"A": 10.0, "B": 20.0}, [("A", "B"), ("A", "B")])

        result = solver.solve(graph)

        assert result.crates == ["B", "A"]
        assert result.total_ms == 30.0

    def test_unset_durations_count_as_zero(self, solver):
        graph = _graph({"A": None, "B": 20.0, "C": None}, [("A", "B"), ("B", "C")])

        result = solver.solve(graph)

        # A adds nothing, so the path stops at B
        assert result.crates == ["B"]
        assert result.total_ms == 20.0

    def test_empty_graph(self, solver):
        graph = BuildGraph()

        result = solver.solve(graph)

        assert result.crates == []
        assert result.total_ms == 0.0
        assert graph.critical_path == []

    def test_no_timing_yields_single_smallest_node(self, solver):
        graph = _graph({"b": None, "a": None, "c": None}, [("a", "b"), ("b", "c")])

        result = solver.solve(graph)

        assert result.crates == ["a"]
        assert result.total_ms == 0.0

    def test_self_loop_terminates(self, solver):
        graph = _graph({"A": 3.0, "B": 4.0}, [("A", "A"), ("A", "B")])

        result = solver.solve(graph)

        assert result.crates == ["B", "A"]
        assert result.total_ms == 7.0

    def test_cycle_terminates(self, solver):
        graph = _graph({"A": 5.0, "B": 3.0}, [("A", "B"), ("B", "A")])

        result = solver.solve(graph)

        assert len(result.crates) == len(set(result.crates))
        assert result.total_ms == 8.0
        solver.logger.warning.assert_called()

    def test_long_chain_does_not_recurse(self, solver):
        n = 5000
        ids = [f"c{i:05d}" for i in range(n)]
        graph = _graph(
            {crate_id: 1.0 for crate_id in ids},
            [(ids[i + 1], ids[i]) for i in range(n - 1)],
        )

        result = solver.solve(graph)

        assert len(result.crates) == n
        assert result.crates[0] == ids[0]
        assert result.total_ms == float(n)

    def test_solving_twice_is_stable(self, solver):
        graph = _graph({"A": 10.0, "B": 20.0, "C": 30.0}, [("A", "B"), ("B", "C")])

        solver.solve(graph)
        first = list(graph.critical_path)
        solver.solve(graph)

        assert graph.critical_path == first
