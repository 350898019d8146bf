"""
Build-execution collaborator.

Drives ``cargo check`` and ``cargo clean``. The timed build streams JSON
messages on stdout; they are drained line by line so cargo never blocks on
a full pipe, and compiler errors are forwarded to the log.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

from ...core.exceptions import CargoCommandError
from ...core.interfaces.logger import ILogger


class CargoBuildService:
    """Runs cargo build-related commands for one manifest."""

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

    def check_command(
        self,
        manifest_path: str | Path,
        profile: str = "dev",
        features: list[str] | None = None,
        all_features: bool = False,
    ) -> list[str]:
        """Build the shared ``cargo check`` argument list."""
        cmd = [self._cargo, "check", "--manifest-path", str(manifest_path)]

        if profile == "release":
            cmd.append("--release")
        elif profile != "dev":
            cmd.extend(["--profile", profile])

        if all_features:
            cmd.append("--all-features")
        elif features:
            cmd.extend(["--features", ",".join(features)])

        return cmd

    def prebuild_deps(
        self,
        manifest_path: str | Path,
        profile: str = "dev",
        features: list[str] | None = None,
        all_features: bool = False,
    ) -> None:
        """Run an untimed check so third-party deps are compiled and cached."""
        cmd = self.check_command(manifest_path, profile, features, all_features)
        self._run(cmd, "cargo check (pre-build deps) failed")

    def run_build(
        self,
        manifest_path: str | Path,
        profile: str = "dev",
        features: list[str] | None = None,
        all_features: bool = False,
    ) -> None:
        """Run ``cargo check --timings`` and wait for it to finish."""
        cmd = self.check_command(manifest_path, profile, features, all_features)
        cmd.extend(["--message-format=json", "--timings"])

        self.logger.debug("Running: %s", " ".join(cmd))
        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, text=True)
        except OSError as e:
            raise CargoCommandError("failed to run cargo", command=cmd, cause=e) from e

        messages = 0
        assert proc.stdout is not None
        with proc.stdout:
            for line in proc.stdout:
                messages += 1
                self._log_message(line)

        returncode = proc.wait()
        self.logger.debug("cargo emitted %d messages", messages)
        if returncode != 0:
            raise CargoCommandError("cargo check failed", command=cmd, exit_code=returncode)

    def clean(self, manifest_path: str | Path, packages: list[str] | None = None) -> None:
        """Run ``cargo clean``, limited to ``packages`` when given."""
        cmd = [self._cargo, "clean", "--manifest-path", str(manifest_path)]
        for pkg in packages or []:
            cmd.extend(["-p", pkg])
        self._run(cmd, "cargo clean failed")

    def _run(self, cmd: list[str], failure: str) -> None:
        self.logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise CargoCommandError("failed to run cargo", command=cmd, cause=e) from e
        if result.returncode != 0:
            raise CargoCommandError(failure, command=cmd, exit_code=result.returncode)

    def _log_message(self, line: str) -> None:
        """Forward compiler errors from a JSON message line to the log."""
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            self.logger.debug("Non-JSON cargo output: %s", line.rstrip())
            return

        if not isinstance(message, dict) or message.get("reason") != "compiler-message":
            return
        diagnostic = message.get("message") or {}
        if diagnostic.get("level") == "error":
            self.logger.error("%s", diagnostic.get("rendered") or diagnostic.get("message"))
