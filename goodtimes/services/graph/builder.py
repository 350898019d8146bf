"""
Graph builder service.

Turns cargo's resolved package metadata into a BuildGraph: one node per
included package and one edge per included dependency. No timing yet.
"""

from __future__ import annotations

from ...core.exceptions import ResolutionError
from ...core.interfaces.logger import ILogger
from ...core.models.graph import BuildGraph, CrateId, CrateNode, DepEdge
from ...core.models.metadata import CargoMetadata, Package


class GraphBuilder:
    """Builds the crate dependency graph from resolved metadata."""

    def __init__(self, logger: ILogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def build(
        self,
        metadata: CargoMetadata,
        include_deps: bool,
        manifest_path: str | None = None,
    ) -> BuildGraph:
        """
        Build the dependency graph.

        Args:
            metadata: Decoded ``cargo metadata`` output
            include_deps: Include external (non-workspace) packages
            manifest_path: Manifest the metadata came from, for error context

        Returns:
            BuildGraph with timing fields unset and an empty critical path

        Raises:
            ResolutionError: If the metadata carries no resolve section
        """
        if metadata.resolve is None:
            raise ResolutionError(manifest_path=manifest_path)

        packages: dict[str, Package] = {pkg.id: pkg for pkg in metadata.packages}
        ws_members = set(metadata.workspace_members)

        nodes: dict[CrateId, CrateNode] = {}
        # (from, to) -> kinds; parallel entries collapse onto one edge
        edge_kinds: dict[tuple[CrateId, CrateId], set[str]] = {}

        for resolve_node in metadata.resolve.nodes:
            is_ws = resolve_node.id in ws_members
            if not include_deps and not is_ws:
                continue

            pkg = packages.get(resolve_node.id)
            if pkg is None:
                self.logger.debug("No package entry for resolve node %s, skipping", resolve_node.id)
                continue

            nodes[resolve_node.id] = CrateNode(
                id=resolve_node.id,
                name=pkg.name,
                version=pkg.version,
                is_workspace_member=is_ws,
                features=resolve_node.features,
            )

            for dep in resolve_node.deps:
                if include_deps or dep.pkg in ws_members:
                    kinds = edge_kinds.setdefault((resolve_node.id, dep.pkg), set())
                    kinds.update(dep.kind_tags)

        edges: list[DepEdge] = []
        dropped = 0
        for (from_id, to_id), kinds in edge_kinds.items():
            if from_id not in nodes or to_id not in nodes:
                dropped += 1
                continue
            edges.append(DepEdge(from_=from_id, to=to_id, dep_kinds=kinds))

        if dropped:
            self.logger.debug("Dropped %d edges pointing outside the graph", dropped)

        self.logger.info(
            "Loaded %d crates and %d edges (include_deps=%s)", len(nodes), len(edges), include_deps
        )

        return BuildGraph(
            nodes=nodes,
            edges=edges,
            roots=list(metadata.workspace_members),
        )
