"""
Console presenter.

Writes the run summary to the terminal: a one-line header with the total,
then one row per crate on the critical path in compile order.
"""

import sys

from ..core.interfaces.presenter import IPresenter
from ..core.models.graph import BuildGraph, CriticalPath
from .formatting import format_ms, truncate_string

BOLD = "\033[1m"
RED = "\033[91m"
RESET = "\033[0m"

NAME_WIDTH = 40


class ConsolePresenter(IPresenter):
    """IPresenter writing plain or ANSI-colored text."""

    def __init__(self, use_color: bool = True, file=None) -> None:
        """
        Args:
            use_color: Emit ANSI codes (only honored on a tty)
            file: Output stream, defaults to sys.stdout
        """
        self._file = file or sys.stdout
        self._err_file = sys.stderr
        self._use_color = use_color and sys.stdout.isatty()

    def _style(self, text: str, code: str) -> str:
        return f"{code}{text}{RESET}" if self._use_color else text

    def print(self, message: str) -> None:
        print(message, file=self._file)

    def print_error(self, message: str) -> None:
        print(self._style(f"Error: {message}", RED), file=self._err_file)

    def print_table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print left-aligned columns under a header and a rule."""
        if not rows:
            return

        widths = [
            max(len(str(cell)) for cell in column) for column in zip(headers, *rows)
        ]

        def line(cells: list[str]) -> str:
            return "  ".join(str(c).ljust(w) for c, w in zip(cells, widths)).rstrip()

        header = line(headers)
        self.print(self._style(header, BOLD))
        self.print("-" * len(header))
        for row in rows:
            self.print(line(row))

    def print_critical_path(self, graph: BuildGraph, path: CriticalPath) -> None:
        """Print the critical path with each crate's start offset and duration."""
        if not path.crates:
            self.print("No crates in graph.")
            return

        rows = []
        for crate_id in path.crates:
            node = graph.nodes.get(crate_id)
            if node is None:
                rows.append([truncate_string(crate_id, NAME_WIDTH), "?", "?", "?"])
                continue
            duration = "fresh" if node.fresh else format_ms(node.duration_ms)
            rows.append(
                [
                    truncate_string(node.name, NAME_WIDTH),
                    node.version,
                    format_ms(node.start_ms),
                    duration,
                ]
            )

        self.print(
            f"Critical path: {len(path.crates)} crates, {format_ms(path.total_ms)} "
            f"({graph.timed_count}/{len(graph.nodes)} crates timed)"
        )
        self.print_table(["Crate", "Version", "Start", "Duration"], rows)
