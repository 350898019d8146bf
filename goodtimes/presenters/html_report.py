"""
HTML report renderer.

Produces a single self-contained page: the visualization's JS and CSS are
inlined and the graph document is embedded as ``window.__GRAPH_DATA__``.
The bundled assets under ``presenters/assets`` are used unless a directory
with a custom frontend build is configured.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ..core.exceptions import ReportRenderError
from ..core.interfaces.logger import ILogger
from ..core.models.graph import BuildGraph

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0" />
<title>cargo goodtimes</title>
<style>{css}</style>
</head>
<body>
<div id="root"></div>
<script>window.__GRAPH_DATA__ = {graph_json};</script>
<script type="module">{js}</script>
</body>
</html>"""


def default_assets_dir() -> Traversable:
    """Directory of the frontend assets shipped with the package."""
    return resources.files(__package__) / "assets"


class HtmlReportRenderer:
    """Renders a BuildGraph to an HTML page and optionally opens it."""

    def __init__(
        self,
        assets_dir: Path | Traversable | None = None,
        report_dir: str = "cargo-goodtimes",
        logger: ILogger | None = None,
    ) -> None:
        self._assets_dir = assets_dir
        self._report_dir = report_dir
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def generate_html(self, graph: BuildGraph) -> str:
        """Build the report page for ``graph``."""
        js, css = self._load_assets()

        # Keep the embedded JSON from closing the script tag early.
        graph_json = graph.to_json().replace("</script", "<\\/script")

        return HTML_TEMPLATE.format(css=css, graph_json=graph_json, js=js)

    def write_report(self, graph: BuildGraph, target_dir: str | Path) -> Path:
        """Write ``<target_dir>/<report_dir>/index.html`` and return its path."""
        html = self.generate_html(graph)
        out_dir = Path(target_dir) / self._report_dir
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / "index.html"
        out_path.write_text(html, encoding="utf-8")
        self.logger.info("Wrote %s", out_path)
        return out_path

    def write_and_open(
        self, graph: BuildGraph, target_dir: str | Path, open_browser: bool = True
    ) -> Path:
        """Write the report and open it in the default browser."""
        out_path = self.write_report(graph, target_dir)
        if open_browser:
            click.launch(out_path.resolve().as_uri())
        return out_path

    def _load_assets(self) -> tuple[str, str]:
        """Return (js, css) from the first matching files of the assets dir."""
        root = self._assets_dir if self._assets_dir is not None else default_assets_dir()
        if not root.is_dir():
            raise ReportRenderError("assets directory not found", assets_dir=str(root))

        js_source: str | None = None
        css_source: str | None = None
        for entry in sorted(root.iterdir(), key=lambda e: e.name):
            if js_source is None and entry.name.endswith(".js"):
                js_source = entry.read_text(encoding="utf-8")
            elif css_source is None and entry.name.endswith(".css"):
                css_source = entry.read_text(encoding="utf-8")

        if js_source is None:
            raise ReportRenderError("no .js asset found", assets_dir=str(root))
        if css_source is None:
            raise ReportRenderError("no .css asset found", assets_dir=str(root))
        return js_source, css_source
