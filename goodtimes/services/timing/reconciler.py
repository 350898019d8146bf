"""
Timing reconciler service.

Attaches cargo's per-unit timings to graph nodes. A package can compile as
several units (lib, build script, proc-macro, bin); rows are aggregated per
(name, version). Build scripts compile early and independently of the
library, so an aggregate without them is preferred whenever one exists: it
gives a truthful start offset and keeps build-script time off the chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ...core.exceptions import ReportMissingError
from ...core.interfaces.logger import ILogger
from ...core.models.graph import BuildGraph, CriticalPath
from ...core.models.timing import UnitTiming
from ..graph.critical_path import CriticalPathSolver
from .report_parser import parse_unit_data

# Cargo still emits a row for units reused from cache; anything shorter
# than this is treated as fresh.
FRESH_THRESHOLD_SECONDS = 0.001

TIMING_REPORT_RELPATH = Path("cargo-timings") / "cargo-timing.html"

TimingKey = tuple[str, str]


@dataclass
class TimingAggregate:
    """Accumulated timing of the units of one package."""

    start: float = float("inf")
    duration: float = 0.0
    units: int = 0

    def add(self, unit: UnitTiming) -> None:
        self.start = min(self.start, unit.start)
        self.duration += unit.duration
        self.units += 1


def timing_report_path(target_dir: str | Path) -> Path:
    """Location of the timing report inside a cargo target directory."""
    return Path(target_dir) / TIMING_REPORT_RELPATH


class TimingReconciler:
    """Applies a build's unit timings to a BuildGraph."""

    def __init__(
        self,
        solver: CriticalPathSolver | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._solver = solver
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    @property
    def solver(self) -> CriticalPathSolver:
        if self._solver is None:
            self._solver = CriticalPathSolver(logger=self._logger)
        return self._solver

    def aggregate(
        self, units: list[UnitTiming]
    ) -> tuple[dict[TimingKey, TimingAggregate], dict[TimingKey, TimingAggregate]]:
        """
        Group unit rows by (name, version).

        Returns:
            Tuple of (all-units aggregates, non-build-script aggregates)
        """
        all_units: dict[TimingKey, TimingAggregate] = {}
        lib_units: dict[TimingKey, TimingAggregate] = {}

        for unit in units:
            all_units.setdefault(unit.key, TimingAggregate()).add(unit)
            if not unit.is_build_script:
                lib_units.setdefault(unit.key, TimingAggregate()).add(unit)

        return all_units, lib_units

    def reconcile(self, graph: BuildGraph, units: list[UnitTiming]) -> int:
        """
        Set duration, start and freshness on every node that has timings.

        Nodes without matching rows keep their fields unset.

        Returns:
            Number of nodes that received timing data
        """
        all_units, lib_units = self.aggregate(units)

        timed = 0
        for node in graph.nodes.values():
            timing = lib_units.get(node.key)
            if timing is None or timing.units == 0:
                timing = all_units.get(node.key)
            if timing is None:
                self.logger.debug("No timing data for %s %s", node.name, node.version)
                continue

            node.start_ms = timing.start * 1000.0
            node.duration_ms = timing.duration * 1000.0
            node.fresh = timing.duration < FRESH_THRESHOLD_SECONDS
            timed += 1

        self.logger.info(
            "Applied timings from %d units to %d of %d crates",
            len(units),
            timed,
            len(graph.nodes),
        )
        return timed

    def apply_units(self, graph: BuildGraph, units: list[UnitTiming]) -> CriticalPath:
        """Reconcile already-parsed units, then compute the critical path."""
        self.reconcile(graph, units)
        return self.solver.solve(graph)

    def apply_report(
        self, graph: BuildGraph, html: str, report_path: str | None = None
    ) -> CriticalPath:
        """
        Parse a timing report's text and apply it.

        The report is fully parsed before the graph is touched, so a parse
        failure leaves the graph unchanged.
        """
        units = parse_unit_data(html, report_path)
        self.logger.debug("Parsed %d unit timings", len(units))
        return self.apply_units(graph, units)

    def apply_timings(self, graph: BuildGraph, report_path: str | Path) -> CriticalPath:
        """
        Read the timing report at ``report_path`` and apply it to the graph.

        Raises:
            ReportMissingError: If the report file does not exist
            ReportParseError: If the embedded unit data cannot be extracted
        """
        path = Path(report_path)
        if not path.exists():
            raise ReportMissingError(
                "timing report not found; did the build run with --timings?",
                report_path=str(path),
            )

        self.logger.debug("Reading timing report %s", path)
        html = path.read_text(encoding="utf-8")
        return self.apply_report(graph, html, report_path=str(path))
