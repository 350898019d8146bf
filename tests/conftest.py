"""
Shared pytest fixtures for goodtimes tests.

This module provides:
- reset_container: isolates the DI container between tests
- metadata_dict / cargo_metadata: a small two-member workspace
- timing_html: builds a cargo-timing.html document around unit rows
"""

import json
from collections.abc import Callable
from typing import Any

import pytest

from goodtimes.core.bootstrap import reset
from goodtimes.core.models.metadata import CargoMetadata

APP_ID = "path+file:///ws/app#0.1.0"
CORE_ID = "path+file:///ws/core#0.1.0"
SERDE_ID = "registry+https://github.com/rust-lang/crates.io-index#serde@1.0.200"
CC_ID = "registry+https://github.com/rust-lang/crates.io-index#cc@1.0.90"


@pytest.fixture(autouse=True)
def reset_container():
    """Give every test a fresh, un-bootstrapped container."""
    reset()
    yield
    reset()


def _dep(name: str, pkg: str, kind: str | None = None) -> dict[str, Any]:
    return {"name": name, "pkg": pkg, "dep_kinds": [{"kind": kind, "target": None}]}


@pytest.fixture
def metadata_dict() -> dict[str, Any]:
    """
    `cargo metadata` output for a workspace with two members.

    app -> core, app -> serde, core -> serde, core -> cc (build)
    """
    return {
        "packages": [
            {"id": APP_ID, "name": "app", "version": "0.1.0"},
            {"id": CORE_ID, "name": "core", "version": "0.1.0"},
            {"id": SERDE_ID, "name": "serde", "version": "1.0.200"},
            {"id": CC_ID, "name": "cc", "version": "1.0.90"},
        ],
        "workspace_members": [APP_ID, CORE_ID],
        "resolve": {
            "nodes": [
                {
                    "id": APP_ID,
                    "deps": [_dep("core", CORE_ID), _dep("serde", SERDE_ID)],
                    "dependencies": [CORE_ID, SERDE_ID],
                    "features": ["default"],
                },
                {
                    "id": CORE_ID,
                    "deps": [_dep("serde", SERDE_ID), _dep("cc", CC_ID, "build")],
                    "dependencies": [SERDE_ID, CC_ID],
                    "features": [],
                },
                {"id": SERDE_ID, "deps": [], "dependencies": [], "features": ["std", "derive"]},
                {"id": CC_ID, "deps": [], "dependencies": [], "features": []},
            ],
            "root": APP_ID,
        },
        "target_directory": "/ws/target",
        "workspace_root": "/ws",
        "version": 1,
    }


@pytest.fixture
def cargo_metadata(metadata_dict: dict[str, Any]) -> CargoMetadata:
    """Decoded form of metadata_dict."""
    return CargoMetadata.model_validate(metadata_dict)


@pytest.fixture
def timing_html() -> Callable[[list[dict[str, Any]]], str]:
    """
    Provide a helper that wraps unit rows in a cargo-timing.html page.

    Returns:
        A callable taking unit rows and returning the HTML text
    """

    def build(rows: list[dict[str, Any]]) -> str:
        return (
            "<html><head><title>Cargo Build Timings</title></head><body>\n"
            "<script>\n"
            f"const UNIT_DATA = {json.dumps(rows)};\n"
            "const CONCURRENCY_DATA = [];\n"
            "</script>\n</body></html>\n"
        )

    return build


@pytest.fixture
def crate_ids() -> dict[str, str]:
    """Package ids of metadata_dict, keyed by crate name."""
    return {"app": APP_ID, "core": CORE_ID, "serde": SERDE_ID, "cc": CC_ID}


def _unit_row(
    name: str,
    version: str,
    target: str = " (check)",
    start: float = 0.0,
    duration: float = 1.0,
) -> dict[str, Any]:
    """One UNIT_DATA row with the extra keys cargo emits."""
    return {
        "i": 0,
        "name": name,
        "version": version,
        "mode": "check",
        "target": target,
        "start": start,
        "duration": duration,
        "rmeta_time": None,
        "unlocked_units": [],
        "unlocked_rmeta_units": [],
    }


@pytest.fixture
def make_unit() -> Callable[..., dict[str, Any]]:
    """Provide the UNIT_DATA row builder."""
    return _unit_row
