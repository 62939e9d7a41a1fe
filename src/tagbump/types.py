"""Type aliases needed in the package."""

from collections.abc import Callable, Sequence
from enum import Enum
from subprocess import CompletedProcess
from typing import TypeAlias


class VersionPart(str, Enum):
    """Component of a release version that can be incremented."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


Command: TypeAlias = Sequence[str]
TagName: TypeAlias = str
CommandRunner: TypeAlias = Callable[..., CompletedProcess[str]]
