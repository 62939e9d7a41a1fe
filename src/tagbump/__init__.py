"""tagbump - create the next semantic-version release tag.

Reads the latest release tag from a git remote, increments one component
or takes an explicit version, and tags the working copy.
"""

from ._version import __version__
from .config import ConfigError, TagbumpConfig, load_config
from .exceptions import (
    CommandError,
    InvalidArgumentError,
    InvalidVersionError,
    NoTagsFoundError,
    RemoteUnreachableError,
    TagAlreadyExistsError,
    TagbumpError,
)
from .git import GitRepository
from .release_version import ReleaseVersion
from .request import ReleaseRequest
from .tagger import ReleaseTagger, TagResult, compute_next_version
from .types import VersionPart

__all__ = [
    "CommandError",
    "ConfigError",
    "GitRepository",
    "InvalidArgumentError",
    "InvalidVersionError",
    "NoTagsFoundError",
    "ReleaseRequest",
    "ReleaseTagger",
    "ReleaseVersion",
    "RemoteUnreachableError",
    "TagAlreadyExistsError",
    "TagResult",
    "TagbumpConfig",
    "TagbumpError",
    "VersionPart",
    "__version__",
    "compute_next_version",
    "load_config",
]
