"""
Build graph models.

The graph is the single value passed between the phases of a run: the
graph builder creates it, the timing reconciler fills in durations and the
critical path solver records the dominant chain. Serialized field names are
stable because the HTML report embeds the document verbatim.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .base import GoodtimesBaseModel, ImmutableModel

# Opaque package identity assigned by cargo's resolver (PackageId repr).
CrateId = str


def _sorted_unique(value: Any) -> Any:
    if isinstance(value, (set, frozenset, tuple, list)):
        return sorted(set(value))
    return value


class CrateNode(GoodtimesBaseModel):
    """One package participating in the build."""

    id: CrateId = Field(description="Resolver-assigned package id")
    name: str = Field(description="Package name")
    version: str = Field(description="Package version")
    is_workspace_member: bool = Field(
        default=False, description="Whether this is a first-party package"
    )
    duration_ms: float | None = Field(
        default=None, ge=0, description="Accumulated compile time, None until timed"
    )
    start_ms: float | None = Field(
        default=None, ge=0, description="Offset from build start, None until timed"
    )
    fresh: bool = Field(default=False, description="Whether the artifact was reused from cache")
    features: list[str] = Field(default_factory=list, description="Enabled feature flags")

    @field_validator("features", mode="before")
    @classmethod
    def normalize_features(cls, v: Any) -> Any:
        """Store features as a sorted list without duplicates."""
        return _sorted_unique(v)

    @property
    def key(self) -> tuple[str, str]:
        """(name, version) pair used to match timing rows."""
        return self.name, self.version


class DepEdge(GoodtimesBaseModel):
    """Directed edge: ``from_`` depends on ``to``."""

    from_: CrateId = Field(alias="from", description="Dependent package")
    to: CrateId = Field(description="Dependency package")
    dep_kinds: list[str] = Field(min_length=1, description="Dependency kinds (Normal/Build/...)")

    @field_validator("dep_kinds", mode="before")
    @classmethod
    def normalize_dep_kinds(cls, v: Any) -> Any:
        """Store kinds as a sorted list without duplicates."""
        return _sorted_unique(v)


class BuildGraph(GoodtimesBaseModel):
    """Aggregate root: crates, their dependency edges and the critical path."""

    nodes: dict[CrateId, CrateNode] = Field(default_factory=dict)
    edges: list[DepEdge] = Field(default_factory=list)
    roots: list[CrateId] = Field(
        default_factory=list, description="Workspace member ids"
    )
    critical_path: list[CrateId] = Field(
        default_factory=list, description="Crate ids on the longest accumulated-time chain"
    )

    def to_json(self, indent: int | None = None) -> str:
        """Serialize using the stable document field names."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> BuildGraph:
        """Load a graph previously produced by :meth:`to_json`."""
        return cls.model_validate_json(data)

    def to_document(self) -> dict[str, Any]:
        """Plain-dict form of :meth:`to_json`."""
        return self.model_dump(mode="json", by_alias=True)

    @property
    def timed_count(self) -> int:
        """Number of nodes that received timing data."""
        return sum(1 for node in self.nodes.values() if node.duration_ms is not None)


class CriticalPath(ImmutableModel):
    """Result of the critical path computation."""

    crates: list[CrateId] = Field(default_factory=list)
    total_ms: float = Field(ge=0, default=0.0)
