"""Configuration loading from package.json.

The project root is the nearest directory, starting from the given path,
that contains a ``package.json``. Settings are read from its
``"gitflow-changelog"`` key; the repository URL falls back to the
package's ``repository`` field.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitflow_changelog.config.models import GitflowChangelogConfig
from gitflow_changelog.exceptions import ConfigNotFoundError, ConfigValidationError

CONFIG_KEY = "gitflow-changelog"
PACKAGE_JSON = "package.json"

# github:owner/repo, gitlab:owner/repo, bitbucket:owner/repo, owner/repo
_SHORTHAND_HOSTS = {
    "github": "https://github.com",
    "gitlab": "https://gitlab.com",
    "bitbucket": "https://bitbucket.org",
}
_SHORTHAND_PATTERN = re.compile(r"^(?:(?P<host>github|gitlab|bitbucket):)?(?P<slug>[\w.-]+/[\w.-]+)$")
_SCP_PATTERN = re.compile(r"^git@(?P<host>[^:]+):(?P<slug>.+)$")


def find_package_json(start: Path | None = None) -> Path:
    """Find package.json in ``start`` or one of its parents.

    Args:
        start: Directory to search from, defaults to the current directory

    Returns:
        Path to package.json

    Raises:
        ConfigNotFoundError: If no package.json exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PACKAGE_JSON
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No {PACKAGE_JSON} found in {current} or any parent directory")


def load_package_json(path: Path) -> dict[str, Any]:
    """Read and decode a package.json file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not a JSON object
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"{path} not found")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigValidationError(f"{path} must contain a JSON object")
    return data


def extract_config(package: dict[str, Any]) -> dict[str, Any]:
    """Return the ``"gitflow-changelog"`` section, empty if absent."""
    section = package.get(CONFIG_KEY, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f'"{CONFIG_KEY}" in {PACKAGE_JSON} must be an object')
    return section


def normalize_repo_url(url: str) -> str:
    """Turn an npm ``repository`` value into a browsable https URL.

    >>> normalize_repo_url("git+https://github.com/acme/widgets.git")
    'https://github.com/acme/widgets'
    >>> normalize_repo_url("github:acme/widgets")
    'https://github.com/acme/widgets'
    """
    url = url.strip()
    shorthand = _SHORTHAND_PATTERN.match(url)
    if shorthand:
        host = _SHORTHAND_HOSTS[shorthand.group("host") or "github"]
        url = f"{host}/{shorthand.group('slug')}"

    scp = _SCP_PATTERN.match(url)
    if scp:
        url = f"https://{scp.group('host')}/{scp.group('slug')}"

    url = url.removeprefix("git+")
    if url.startswith(("git://", "ssh://")):
        url = "https://" + url.split("://", 1)[1].split("@", 1)[-1]
    url = url.removesuffix("/").removesuffix(".git")
    return url


def get_repository_url(package: dict[str, Any]) -> str:
    """Read the repository URL of a package, empty if it has none."""
    repository = package.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")
    if not isinstance(repository, str) or not repository:
        return ""
    return normalize_repo_url(repository)


def load_config(path: Path | None = None) -> GitflowChangelogConfig:
    """Load the configuration of the project at ``path``.

    Args:
        path: Project directory (or any subdirectory), defaults to cwd

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If package.json cannot be found
        ConfigValidationError: If the configuration is invalid
    """
    package_path = find_package_json(path)
    package = load_package_json(package_path)
    section = dict(extract_config(package))
    section.setdefault("repo_url", get_repository_url(package))

    try:
        return GitflowChangelogConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {package_path}:\n{e}") from e


def get_project_root(path: Path | None = None) -> Path:
    """Directory holding the project's package.json."""
    return find_package_json(path).parent
