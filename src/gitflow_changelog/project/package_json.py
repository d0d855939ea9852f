"""package.json version manipulation.

npm manifests are rewritten with ``json.dumps(indent=2)`` plus a trailing
newline, the same layout npm itself writes. Only the top-level
``version`` field changes; key order and every other field are kept.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from gitflow_changelog.exceptions import ManifestError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def _read_manifest(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def get_manifest_version(path: Path) -> str:
    """Get the version from a package manifest.

    Raises:
        ManifestError: If the file is missing, invalid or has no version
    """
    version = _read_manifest(path).get("version")
    if not isinstance(version, str):
        raise ManifestError(f"No version field in {path}")
    return version


def update_manifest_version(path: Path, new_version: str) -> Path:
    """Set the version of a package manifest.

    Args:
        path: package.json or package-lock.json
        new_version: Version to write

    Returns:
        The manifest path

    Raises:
        ManifestError: If the manifest cannot be read or written
    """
    data = _read_manifest(path)
    data["version"] = new_version
    try:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Could not write {path}: {e}") from e
    return path


def update_manifests(paths: Iterable[Path], new_version: str) -> list[Path]:
    """Set the version of every manifest in ``paths``."""
    return [update_manifest_version(path, new_version) for path in paths]
