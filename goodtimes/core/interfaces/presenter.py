"""
Presenter interface definitions for user-facing output.
"""

from abc import ABC, abstractmethod

from ..models.graph import BuildGraph, CriticalPath


class IPresenter(ABC):
    """
    Interface for output presentation.

    Implementations handle formatting and displaying run results
    to the user.
    """

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a message to output."""
        pass

    @abstractmethod
    def print_error(self, message: str) -> None:
        """Print an error message."""
        pass

    @abstractmethod
    def print_table(self, headers: list[str], rows: list[list[str]]) -> None:
        """
        Print a table.

        Args:
            headers: Column headers
            rows: Table rows (list of row values)
        """
        pass

    @abstractmethod
    def print_critical_path(self, graph: BuildGraph, path: CriticalPath) -> None:
        """
        Print the critical path of a timed build graph.

        Args:
            graph: Graph the path was computed on
            path: Critical path result
        """
        pass
