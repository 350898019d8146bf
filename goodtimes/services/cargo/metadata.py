"""
Package metadata collaborator.

Runs ``cargo metadata`` and decodes its JSON output.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from pydantic import ValidationError

from ...core.exceptions import CargoCommandError, MetadataDecodeError
from ...core.interfaces.logger import ILogger
from ...core.models.metadata import CargoMetadata


class CargoMetadataService:
    """Loads workspace metadata through ``cargo metadata``."""

    def __init__(self, cargo: str = "cargo", logger: ILogger | None = None) -> None:
        self._cargo = cargo
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def load(self, manifest_path: str | Path, no_deps: bool = False) -> CargoMetadata:
        """
        Run ``cargo metadata`` for a manifest.

        Args:
            manifest_path: Path to Cargo.toml
            no_deps: Skip dependency resolution (faster, no resolve section)

        Raises:
            CargoCommandError: If cargo cannot run or exits non-zero
            MetadataDecodeError: If the output is not valid metadata
        """
        cmd = [
            self._cargo,
            "metadata",
            "--format-version",
            "1",
            "--manifest-path",
            str(manifest_path),
        ]
        if no_deps:
            cmd.append("--no-deps")

        self.logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise CargoCommandError("failed to run cargo", command=cmd, cause=e) from e

        if result.returncode != 0:
            raise CargoCommandError(
                f"cargo metadata failed: {result.stderr.strip()}",
                command=cmd,
                exit_code=result.returncode,
            )

        return self.decode(result.stdout, manifest_path)

    def decode(self, output: str | bytes, manifest_path: str | Path | None = None) -> CargoMetadata:
        """Decode ``cargo metadata`` JSON output."""
        try:
            return CargoMetadata.model_validate_json(output)
        except ValidationError as e:
            context = {"manifest_path": str(manifest_path)} if manifest_path else None
            raise MetadataDecodeError(
                f"invalid cargo metadata output: {e.error_count()} errors",
                context=context,
                cause=e,
            ) from e

    def workspace_package_names(self, manifest_path: str | Path) -> list[str]:
        """Names of all workspace member packages."""
        metadata = self.load(manifest_path, no_deps=True)
        return [pkg.name for pkg in metadata.packages]

    def target_directory(self, manifest_path: str | Path) -> Path:
        """The cargo target directory of the workspace."""
        metadata = self.load(manifest_path, no_deps=True)
        if not metadata.target_directory:
            raise MetadataDecodeError(
                "cargo metadata did not report a target directory",
                context={"manifest_path": str(manifest_path)},
            )
        return Path(metadata.target_directory)
