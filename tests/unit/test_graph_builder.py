"""
Unit tests for GraphBuilder.
"""

from unittest.mock import MagicMock

import pytest

from goodtimes.core.exceptions import ResolutionError
from goodtimes.core.models.metadata import CargoMetadata
from goodtimes.services.graph.builder import GraphBuilder


@pytest.fixture
def builder():
    return GraphBuilder(logger=MagicMock())


class TestGraphBuilder:
    def test_workspace_only_graph(self, builder, cargo_metadata, crate_ids):
        graph = builder.build(cargo_metadata, include_deps=False)

        assert set(graph.nodes) == {crate_ids["app"], crate_ids["core"]}
        assert [(e.from_, e.to) for e in graph.edges] == [(crate_ids["app"], crate_ids["core"])]

    def test_pruned_graph_touches_only_workspace_members(self, builder, cargo_metadata):
        graph = builder.build(cargo_metadata, include_deps=False)
        members = set(cargo_metadata.workspace_members)

        assert all(node.is_workspace_member for node in graph.nodes.values())
        for edge in graph.edges:
            assert edge.from_ in members
            assert edge.to in members

    def test_include_deps_keeps_external_packages(self, builder, cargo_metadata, crate_ids):
        graph = builder.build(cargo_metadata, include_deps=True)

        assert set(graph.nodes) == set(crate_ids.values())
        assert len(graph.edges) == 4
        assert graph.nodes[crate_ids["serde"]].is_workspace_member is False
        assert graph.nodes[crate_ids["app"]].is_workspace_member is True

    def test_no_dangling_edges(self, builder, metadata_dict):
        # Dependency on a package the metadata never lists
        metadata_dict["resolve"]["nodes"][0]["deps"].append(
            {"name": "ghost", "pkg": "ghost 0.0.1", "dep_kinds": [{"kind": None}]}
        )
        graph = builder.build(CargoMetadata.model_validate(metadata_dict), include_deps=True)

        for edge in graph.edges:
            assert edge.from_ in graph.nodes
            assert edge.to in graph.nodes

    def test_nodes_start_untimed(self, builder, cargo_metadata):
        graph = builder.build(cargo_metadata, include_deps=True)

        for node in graph.nodes.values():
            assert node.duration_ms is None
            assert node.start_ms is None
            assert node.fresh is False
        assert graph.critical_path == []

    def test_node_identity_and_features(self, builder, cargo_metadata, crate_ids):
        graph = builder.build(cargo_metadata, include_deps=True)

        serde = graph.nodes[crate_ids["serde"]]
        assert serde.name == "serde"
        assert serde.version == "1.0.200"
        assert serde.features == ["derive", "std"]

    def test_dep_kinds_mapped_to_tags(self, builder, cargo_metadata, crate_ids):
        graph = builder.build(cargo_metadata, include_deps=True)
        kinds = {(e.from_, e.to): e.dep_kinds for e in graph.edges}

        assert kinds[(crate_ids["core"], crate_ids["cc"])] == ["Build"]
        assert kinds[(crate_ids["app"], crate_ids["core"])] == ["Normal"]

    def test_unrecognized_dep_kind_is_tagged_unknown(self, builder, metadata_dict, crate_ids):
        core = metadata_dict["resolve"]["nodes"][1]
        core["deps"][0]["dep_kinds"] = [{"kind": "artifact", "target": None}]

        graph = builder.build(CargoMetadata.model_validate(metadata_dict), include_deps=True)
        kinds = {(e.from_, e.to): e.dep_kinds for e in graph.edges}

        assert kinds[(crate_ids["core"], crate_ids["serde"])] == ["Unknown"]

    def test_parallel_dependency_entries_collapse(self, builder, metadata_dict, crate_ids):
        app = metadata_dict["resolve"]["nodes"][0]
        app["deps"].append(
            {"name": "core", "pkg": crate_ids["core"], "dep_kinds": [{"kind": "dev"}]}
        )
        graph = builder.build(CargoMetadata.model_validate(metadata_dict), include_deps=False)

        assert len(graph.edges) == 1
        assert graph.edges[0].dep_kinds == ["Development", "Normal"]

    def test_dependency_without_kinds_is_normal(self, builder, metadata_dict, crate_ids):
        metadata_dict["resolve"]["nodes"][0]["deps"] = [{"name": "core", "pkg": crate_ids["core"]}]
        graph = builder.build(CargoMetadata.model_validate(metadata_dict), include_deps=False)

        assert graph.edges[0].dep_kinds == ["Normal"]

    def test_roots_are_all_workspace_members(self, builder, cargo_metadata, crate_ids):
        for include_deps in (False, True):
            graph = builder.build(cargo_metadata, include_deps=include_deps)
            assert graph.roots == [crate_ids["app"], crate_ids["core"]]

    def test_missing_resolve_raises(self, builder, metadata_dict):
        metadata_dict["resolve"] = None

        with pytest.raises(ResolutionError) as exc_info:
            builder.build(
                CargoMetadata.model_validate(metadata_dict),
                include_deps=False,
                manifest_path="/ws/Cargo.toml",
            )
        assert exc_info.value.context["manifest_path"] == "/ws/Cargo.toml"

    def test_empty_resolve_is_valid(self, builder, metadata_dict):
        metadata_dict["resolve"] = {"nodes": []}
        graph = builder.build(CargoMetadata.model_validate(metadata_dict), include_deps=True)

        assert graph.nodes == {}
        assert graph.edges == []
