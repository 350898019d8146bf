"""
Unit tests for CargoMetadataService and manifest resolution.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from goodtimes.core.exceptions import (
    CargoCommandError,
    ManifestNotFoundError,
    MetadataDecodeError,
)
from goodtimes.services.cargo.manifest import resolve_manifest
from goodtimes.services.cargo.metadata import CargoMetadataService

RUN_TARGET = "goodtimes.services.cargo.metadata.subprocess.run"


@pytest.fixture
def service():
    """Create CargoMetadataService with mocked logger."""
    return CargoMetadataService(logger=MagicMock())


def _completed(stdout="", returncode=0, stderr=""):
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


class TestLoad:
    def test_decodes_cargo_output(self, service, metadata_dict, crate_ids):
        with patch(RUN_TARGET, return_value=_completed(json.dumps(metadata_dict))) as mock_run:
            metadata = service.load("/ws/Cargo.toml")

        cmd = mock_run.call_args.args[0]
        assert cmd == [
            "cargo",
            "metadata",
            "--format-version",
            "1",
            "--manifest-path",
            "/ws/Cargo.toml",
        ]
        assert metadata.workspace_members == [crate_ids["app"], crate_ids["core"]]
        assert metadata.resolve is not None
        assert len(metadata.resolve.nodes) == 4

    def test_no_deps_flag(self, service, metadata_dict):
        with patch(RUN_TARGET, return_value=_completed(json.dumps(metadata_dict))) as mock_run:
            service.load("/ws/Cargo.toml", no_deps=True)

        assert mock_run.call_args.args[0][-1] == "--no-deps"

    def test_nonzero_exit_raises_with_stderr(self, service):
        failed = _completed(returncode=101, stderr="error: could not find `Cargo.toml`\n")
        with patch(RUN_TARGET, return_value=failed):
            with pytest.raises(CargoCommandError, match="could not find"):
                service.load("/ws/Cargo.toml")

    def test_missing_cargo_raises(self, service):
        with patch(RUN_TARGET, side_effect=FileNotFoundError("cargo")):
            with pytest.raises(CargoCommandError):
                service.load("/ws/Cargo.toml")

    def test_invalid_output_raises_decode_error(self, service):
        with patch(RUN_TARGET, return_value=_completed("{not json")):
            with pytest.raises(MetadataDecodeError) as exc_info:
                service.load("/ws/Cargo.toml")

        assert exc_info.value.context["manifest_path"] == "/ws/Cargo.toml"


class TestWorkspaceQueries:
    def test_workspace_package_names(self, service):
        no_deps = {
            "packages": [
                {"id": "a", "name": "app", "version": "0.1.0"},
                {"id": "c", "name": "core", "version": "0.1.0"},
            ],
            "workspace_members": ["a", "c"],
            "resolve": None,
            "target_directory": "/ws/target",
        }
        with patch(RUN_TARGET, return_value=_completed(json.dumps(no_deps))):
            assert service.workspace_package_names("/ws/Cargo.toml") == ["app", "core"]

    def test_target_directory(self, service, metadata_dict):
        with patch(RUN_TARGET, return_value=_completed(json.dumps(metadata_dict))):
            assert str(service.target_directory("/ws/Cargo.toml")) == "/ws/target"


class TestResolveManifest:
    def test_file_path(self, tmp_path):
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text("[package]\n")
        assert resolve_manifest(manifest) == manifest.resolve()

    def test_directory_path(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text("[workspace]\n")
        assert resolve_manifest(tmp_path) == (tmp_path / "Cargo.toml").resolve()

    def test_directory_without_manifest(self, tmp_path):
        with pytest.raises(ManifestNotFoundError) as exc_info:
            resolve_manifest(tmp_path)
        assert exc_info.value.context["path"] == str(tmp_path)

    def test_nonexistent_path(self, tmp_path):
        with pytest.raises(ManifestNotFoundError, match="does not exist"):
            resolve_manifest(tmp_path / "missing")
