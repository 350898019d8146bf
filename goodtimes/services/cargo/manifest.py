"""
Manifest path resolution.
"""

from pathlib import Path

from ...core.exceptions import ManifestNotFoundError


def resolve_manifest(path: str | Path) -> Path:
    """
    Resolve a user-supplied path to an absolute Cargo.toml path.

    Args:
        path: A Cargo.toml file or a directory containing one

    Raises:
        ManifestNotFoundError: If the path does not exist or the directory
            has no Cargo.toml
    """
    p = Path(path)
    if p.is_file():
        return p.resolve()
    if p.is_dir():
        manifest = p / "Cargo.toml"
        if not manifest.exists():
            raise ManifestNotFoundError(f"no Cargo.toml found in {p}", path=str(p))
        return manifest.resolve()
    raise ManifestNotFoundError(f"path does not exist: {p}", path=str(p))
