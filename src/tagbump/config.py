"""Configuration loading for tagbump.

Settings are read from ``tagbump.toml`` (a ``[tagbump]`` table) or from
``pyproject.toml`` (a ``[tool.tagbump]`` table), in that order. An
explicit path always wins. Example::

    [tool.tagbump]
    remote = "upstream"
    latest_tag_command = ["make", "-s", "latest-release-tag"]
    push = true
"""

import tomllib
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_FILE = "tagbump.toml"
PYPROJECT_FILE = "pyproject.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded."""


class TagbumpConfig(BaseModel):
    """Settings controlling where tags are read from and how they are made.

    Attributes:
        remote: Name of the remote holding the release tags.
        remote_url: If set, the remote is added at this URL for the run and
            removed afterwards.
        sync_tags: Delete all local tags and refetch them from the remote
            before resolving. If False the remote is queried read-only.
        latest_tag_command: Build tool command printing the latest release
            tag. If unset, the highest matching tag is used.
        push: Push the created tag to the remote.
        tag_message: Message for an annotated tag. Lightweight if unset.
        dry_run: Resolve and compute the next tag without creating it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    remote: str = Field(default="origin", min_length=1)
    remote_url: str | None = None
    sync_tags: bool = True
    latest_tag_command: list[str] | None = None
    push: bool = False
    tag_message: str | None = None
    dry_run: bool = False

    def merged(self: Self, **overrides: Any) -> Self:
        """Return a copy with the non-None overrides applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **updates})


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _extract_section(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    if path.name == PYPROJECT_FILE:
        section = data.get("tool", {}).get("tagbump")
    else:
        section = data.get("tagbump")
    if section is not None and not isinstance(section, dict):
        raise ConfigError(f"tagbump settings in {path} must be a table")
    return section


def find_config_file(cwd: Path | None = None) -> Path | None:
    """Find a config file holding tagbump settings.

    Args:
        cwd: Directory to search. Defaults to the current directory.

    Returns:
        Path to the first file with a tagbump section, or None.
    """
    directory = cwd or Path.cwd()
    for name in (CONFIG_FILE, PYPROJECT_FILE):
        candidate = directory / name
        if not candidate.is_file():
            continue
        if _extract_section(candidate, _read_toml(candidate)) is not None:
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> TagbumpConfig:
    """Load tagbump configuration.

    Args:
        path: Explicit config file. Must exist if given.
        cwd: Directory searched when no path is given.

    Returns:
        The loaded configuration, or defaults if no file has settings.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        config_path: Path | None = path
    else:
        config_path = find_config_file(cwd)

    if config_path is None:
        return TagbumpConfig()

    section = _extract_section(config_path, _read_toml(config_path)) or {}
    try:
        return TagbumpConfig.model_validate(section)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f"Invalid configuration in {config_path}: {errors}") from e
