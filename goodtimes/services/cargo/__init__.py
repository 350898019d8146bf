"""Collaborators that talk to cargo."""

from .build import CargoBuildService
from .manifest import resolve_manifest
from .metadata import CargoMetadataService

__all__ = ["CargoBuildService", "CargoMetadataService", "resolve_manifest"]
