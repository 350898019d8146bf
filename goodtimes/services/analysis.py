"""
Analysis service.

Runs one complete analysis of a workspace:

1. load the dependency graph from ``cargo metadata``
2. clean what should be recompiled (everything, or only workspace crates
   after pre-building external deps)
3. run a ``--timings`` build
4. apply the timings and compute the critical path
5. write the HTML report

Each run computes a fresh graph; nothing is persisted between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.interfaces.logger import ILogger
from ..core.models.config import BuildConfig, OutputConfig
from ..core.models.graph import BuildGraph, CriticalPath
from ..presenters.html_report import HtmlReportRenderer
from .cargo.build import CargoBuildService
from .cargo.manifest import resolve_manifest
from .cargo.metadata import CargoMetadataService
from .graph.builder import GraphBuilder
from .timing.reconciler import TimingReconciler, timing_report_path


@dataclass
class AnalysisResult:
    """Outcome of an analysis run."""

    graph: BuildGraph
    critical_path: CriticalPath
    report_path: Path | None = None


class AnalysisService:
    """Coordinates metadata loading, the timed build and reporting."""

    def __init__(
        self,
        metadata_service: CargoMetadataService | None = None,
        build_service: CargoBuildService | None = None,
        graph_builder: GraphBuilder | None = None,
        reconciler: TimingReconciler | None = None,
        renderer: HtmlReportRenderer | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._logger = logger
        self._metadata = metadata_service or CargoMetadataService(logger=logger)
        self._build = build_service or CargoBuildService(logger=logger)
        self._builder = graph_builder or GraphBuilder(logger=logger)
        self._reconciler = reconciler or TimingReconciler(logger=logger)
        self._renderer = renderer

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def run(
        self,
        manifest: str | Path,
        build: BuildConfig,
        output: OutputConfig,
    ) -> AnalysisResult:
        """
        Analyze the workspace at ``manifest``.

        Args:
            manifest: Cargo.toml or directory containing it
            build: Profile, features and dependency scope
            output: Report location and browser behaviour

        Returns:
            AnalysisResult with the timed graph and report location
        """
        manifest_path = resolve_manifest(manifest)
        self.logger.info("Using manifest: %s", manifest_path)

        metadata = self._metadata.load(manifest_path)
        graph = self._builder.build(
            metadata, build.include_deps, manifest_path=str(manifest_path)
        )

        if build.include_deps:
            # Full clean so third-party deps are also recompiled and timed.
            self.logger.info("Cleaning all crates")
            self._build.clean(manifest_path)
        else:
            self.logger.info("Pre-building dependencies")
            self._build.prebuild_deps(
                manifest_path, build.profile, build.features, build.all_features
            )
            ws_packages = self._metadata.workspace_package_names(manifest_path)
            self.logger.info("Cleaning %d workspace crate(s)", len(ws_packages))
            self._build.clean(manifest_path, packages=ws_packages)

        self.logger.info("Running timed build")
        self._build.run_build(manifest_path, build.profile, build.features, build.all_features)

        target_dir = self._target_dir(metadata.target_directory, manifest_path)
        critical_path = self._reconciler.apply_timings(graph, timing_report_path(target_dir))
        self.logger.info("Timed build complete")

        report_path = self._renderer_for(output).write_and_open(
            graph, target_dir, open_browser=output.open_browser
        )
        return AnalysisResult(graph=graph, critical_path=critical_path, report_path=report_path)

    def analyze_files(
        self,
        metadata_file: str | Path,
        timing_report: str | Path,
        include_deps: bool = False,
    ) -> AnalysisResult:
        """
        Analyze saved ``cargo metadata`` output and a saved timing report.

        Nothing is built; useful for inspecting a CI build after the fact.
        """
        metadata_file = Path(metadata_file)
        metadata = self._metadata.decode(metadata_file.read_bytes(), metadata_file)
        graph = self._builder.build(metadata, include_deps, manifest_path=str(metadata_file))
        critical_path = self._reconciler.apply_timings(graph, timing_report)
        return AnalysisResult(graph=graph, critical_path=critical_path)

    def _target_dir(self, reported: str | None, manifest_path: Path) -> Path:
        if reported:
            return Path(reported)
        return self._metadata.target_directory(manifest_path)

    def _renderer_for(self, output: OutputConfig) -> HtmlReportRenderer:
        if self._renderer is None:
            assets_dir = Path(output.assets_dir) if output.assets_dir else None
            self._renderer = HtmlReportRenderer(
                assets_dir=assets_dir, report_dir=output.report_dir, logger=self._logger
            )
        return self._renderer
