"""
Cargo metadata models.

The subset of ``cargo metadata --format-version 1`` that goodtimes reads.
Field names follow cargo's JSON output.
"""

from __future__ import annotations

from pydantic import Field

from .base import ExternalModel

# cargo's `kind` value -> display tag
DEP_KIND_TAGS: dict[str | None, str] = {
    None: "Normal",
    "normal": "Normal",
    "dev": "Development",
    "build": "Build",
}
# Kinds newer than this mapping
UNKNOWN_DEP_KIND = "Unknown"


class DepKindInfo(ExternalModel):
    """One dependency kind entry of a resolved dependency."""

    kind: str | None = None
    target: str | None = None

    @property
    def tag(self) -> str:
        return DEP_KIND_TAGS.get(self.kind, UNKNOWN_DEP_KIND)


class NodeDep(ExternalModel):
    """A resolved dependency of a resolve node."""

    name: str
    pkg: str
    dep_kinds: list[DepKindInfo] = Field(default_factory=list)

    @property
    def kind_tags(self) -> list[str]:
        """Display tags for this dependency; untagged entries count as Normal."""
        tags = {info.tag for info in self.dep_kinds}
        return sorted(tags) if tags else [DEP_KIND_TAGS[None]]


class ResolveNode(ExternalModel):
    """A package in the resolved dependency graph."""

    id: str
    deps: list[NodeDep] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)


class Resolve(ExternalModel):
    """The resolved dependency graph."""

    nodes: list[ResolveNode] = Field(default_factory=list)
    root: str | None = None


class Package(ExternalModel):
    """A package known to the workspace."""

    id: str
    name: str
    version: str
    manifest_path: str | None = None


class CargoMetadata(ExternalModel):
    """Decoded output of ``cargo metadata``."""

    packages: list[Package] = Field(default_factory=list)
    workspace_members: list[str] = Field(default_factory=list)
    resolve: Resolve | None = None
    target_directory: str | None = None
    workspace_root: str | None = None
