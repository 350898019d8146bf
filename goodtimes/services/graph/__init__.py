"""Dependency graph construction and critical path computation."""

from .builder import GraphBuilder
from .critical_path import CriticalPathSolver

__all__ = ["CriticalPathSolver", "GraphBuilder"]
