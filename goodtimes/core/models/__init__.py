"""
Pydantic models for goodtimes.

This package provides typed, validated models for all goodtimes data structures.
All models use Pydantic v2.
"""

from .base import ExternalModel, GoodtimesBaseModel, ImmutableModel
from .config import BuildConfig, LoggingConfig, OutputConfig
from .graph import BuildGraph, CrateId, CrateNode, CriticalPath, DepEdge
from .metadata import CargoMetadata, DepKindInfo, NodeDep, Package, Resolve, ResolveNode
from .timing import UnitTiming

__all__ = [
    "BuildConfig",
    "BuildGraph",
    "CargoMetadata",
    "CrateId",
    "CrateNode",
    "CriticalPath",
    "DepEdge",
    "DepKindInfo",
    "ExternalModel",
    "GoodtimesBaseModel",
    "ImmutableModel",
    "LoggingConfig",
    "NodeDep",
    "OutputConfig",
    "Package",
    "Resolve",
    "ResolveNode",
    "UnitTiming",
]
