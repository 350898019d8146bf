"""
Native Click implementation of the goodtimes command.

Usage: cargo goodtimes [options]
       cargo goodtimes analyze METADATA_JSON TIMING_HTML
"""

from __future__ import annotations

from pathlib import Path

import click

from ...core.bootstrap import bootstrap
from ...core.container import get_container
from ...core.exceptions import ConfigFileError, GoodtimesException
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import BuildConfig, OutputConfig
from ...core.settings import GoodtimesSettings
from ...services.analysis import AnalysisResult, AnalysisService
from ..context import GoodtimesContext


def _split_features(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated and comma-separated --features values."""
    features: list[str] = []
    for value in values:
        features.extend(f.strip() for f in value.split(",") if f.strip())
    return features


def _build_config(
    settings: GoodtimesSettings,
    profile: str | None,
    features: tuple[str, ...],
    all_features: bool | None,
    include_deps: bool | None,
) -> BuildConfig:
    """Overlay command-line options on the configured build section."""
    updates: dict = {}
    if profile is not None:
        updates["profile"] = profile
    if features:
        updates["features"] = _split_features(features)
    if all_features is not None:
        updates["all_features"] = all_features
    if include_deps is not None:
        updates["include_deps"] = include_deps
    return settings.build.model_copy(update=updates)


def _output_config(settings: GoodtimesSettings, no_open: bool) -> OutputConfig:
    if no_open:
        return settings.output.model_copy(update={"open_browser": False})
    return settings.output


def _report(result: AnalysisResult, output_json: bool) -> None:
    if output_json:
        click.echo(result.graph.to_json(indent=2))
        return

    presenter = get_container().resolve(IPresenter)  # type: ignore[type-abstract]
    presenter.print_critical_path(result.graph, result.critical_path)
    if result.report_path is not None:
        presenter.print(f"Report: {result.report_path}")


@click.group("goodtimes", invoke_without_command=True)
@click.option(
    "--manifest-path",
    default=".",
    show_default=True,
    help="Path to Cargo.toml or directory containing it",
)
@click.option("--profile", default=None, help="Build profile (default: dev)")
@click.option(
    "--features", multiple=True, help="Features to enable (comma-separated, repeatable)"
)
@click.option("--all-features", is_flag=True, default=None, help="Enable all features")
@click.option(
    "--include-deps",
    is_flag=True,
    default=None,
    help="Also recompile and time external dependencies",
)
@click.option("--no-open", is_flag=True, help="Don't open browser automatically")
@click.option("--json", "output_json", is_flag=True, help="Print the graph as JSON")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Explicit config file (default: search for goodtimes.toml)",
)
@click.pass_context
def goodtimes(
    ctx: click.Context,
    manifest_path: str,
    profile: str | None,
    features: tuple[str, ...],
    all_features: bool | None,
    include_deps: bool | None,
    no_open: bool,
    output_json: bool,
    config_path: Path | None,
) -> None:
    """Interactive compilation timing analyzer.

    Rebuilds the workspace with cargo's --timings instrumentation, maps
    the per-unit timings onto the crate dependency graph and reports the
    critical path: the chain of crates that bounds total build time.

    \b
    By default only workspace crates are recompiled; external dependencies
    are pre-built and stay cached. Use --include-deps to time everything.

    \b
    Examples:
        cargo goodtimes
        cargo goodtimes --profile release --features serde,cli
        cargo goodtimes --include-deps --no-open
        cargo goodtimes analyze metadata.json cargo-timing.html
    """
    try:
        gt_ctx = GoodtimesContext.create(config_path=config_path)
    except GoodtimesException as e:
        raise click.ClickException(str(e)) from e

    if gt_ctx.settings.config_error and config_path is not None:
        err = ConfigFileError(gt_ctx.settings.config_error, file_path=str(config_path))
        raise click.ClickException(str(err))

    bootstrap(gt_ctx.settings)
    ctx.obj = gt_ctx
    if gt_ctx.settings.config_error:
        presenter = get_container().resolve(IPresenter)  # type: ignore[type-abstract]
        presenter.print_error(f"{gt_ctx.settings.config_error}; using defaults")

    if ctx.invoked_subcommand is not None:
        return

    build = _build_config(gt_ctx.settings, profile, features, all_features, include_deps)
    output = _output_config(gt_ctx.settings, no_open or output_json)

    try:
        result = AnalysisService().run(manifest_path, build, output)
    except GoodtimesException as e:
        raise click.ClickException(str(e)) from e

    _report(result, output_json)


@goodtimes.command("analyze")
@click.argument("metadata_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("timing_report", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--include-deps",
    is_flag=True,
    default=None,
    help="Keep external dependencies in the graph",
)
@click.option("--json", "output_json", is_flag=True, help="Print the graph as JSON")
@click.pass_obj
def analyze(
    gt_ctx: GoodtimesContext,
    metadata_file: Path,
    timing_report: Path,
    include_deps: bool | None,
    output_json: bool,
) -> None:
    """Analyze saved `cargo metadata` output and a saved timing report.

    Nothing is built. METADATA_JSON is the output of
    `cargo metadata --format-version 1`; TIMING_HTML is a
    cargo-timing.html written by a `--timings` build.
    """
    if include_deps is None:
        include_deps = gt_ctx.settings.build.include_deps

    try:
        result = AnalysisService().analyze_files(metadata_file, timing_report, include_deps)
    except GoodtimesException as e:
        raise click.ClickException(str(e)) from e

    _report(result, output_json)
