"""Models the release version stored in tags."""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Final, Self

from .exceptions import InvalidVersionError
from .types import VersionPart

TAG_PATTERN: Final = re.compile(
    r"^v(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?:-(?P<suffix>[a-zA-Z]*))?$",
    re.ASCII,
)
SUFFIX_PATTERN: Final = re.compile(r"[a-zA-Z]+")


@total_ordering
@dataclass(frozen=True)
class ReleaseVersion:
    """Semantic version carried by a release tag.

    Versions order by their numeric components. On equal components a
    version without a suffix ranks above one with a suffix, so ``v1.0.0``
    is newer than ``v1.0.0-rc``.

    Attributes:
        major: Major version number (breaking changes).
        minor: Minor version number (backward-compatible features).
        patch: Patch version number (backward-compatible fixes).
        suffix: Optional alphabetic label, e.g. "beta" or "dirty".
    """

    major: int
    minor: int
    patch: int
    suffix: str | None = None

    def __post_init__(self: Self) -> None:
        """Validate components and normalize an empty suffix."""
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise InvalidVersionError(
                f"v{self.major}.{self.minor}.{self.patch}",
                "Version components must be non-negative",
            )
        if self.suffix == "":
            object.__setattr__(self, "suffix", None)
        elif self.suffix is not None and not SUFFIX_PATTERN.fullmatch(self.suffix):
            raise InvalidVersionError(
                self.suffix, f"Invalid version suffix: {self.suffix}"
            )

    @classmethod
    def parse(cls, tag: str) -> Self:
        """Parse a release tag.

        Args:
            tag: Tag in format "vMAJOR.MINOR.PATCH[-SUFFIX]".

        Returns:
            Parsed ReleaseVersion instance.

        Raises:
            InvalidVersionError: If the tag format is invalid.
        """
        match = TAG_PATTERN.fullmatch(tag)
        if match is None:
            raise InvalidVersionError(tag)

        return cls(
            int(match["major"]),
            int(match["minor"]),
            int(match["patch"]),
            match["suffix"] or None,
        )

    @classmethod
    def is_valid(cls, tag: str) -> bool:
        """Check whether a string is a release tag."""
        return TAG_PATTERN.fullmatch(tag) is not None

    def bump(self: Self, part: VersionPart) -> Self:
        """Increment one component and reset every lower one.

        The suffix is dropped since a bumped version is a new release.

        Args:
            part: The component to increment.

        Returns:
            The incremented version.
        """
        if part is VersionPart.MAJOR:
            return type(self)(self.major + 1, 0, 0)
        if part is VersionPart.MINOR:
            return type(self)(self.major, self.minor + 1, 0)
        return type(self)(self.major, self.minor, self.patch + 1)

    @property
    def tag(self: Self) -> str:
        """Tag name for this version."""
        return str(self)

    def _sort_key(self: Self) -> tuple[int, int, int, int, str]:
        # A missing suffix sorts after any suffix on the same triple.
        if self.suffix is None:
            return (self.major, self.minor, self.patch, 1, "")
        return (self.major, self.minor, self.patch, 0, self.suffix)

    def __lt__(self: Self, other: object) -> bool:
        """Compare by release precedence."""
        if not isinstance(other, ReleaseVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self: Self) -> str:
        """Return string representation of version.

        Returns:
            Version string in format "vMAJOR.MINOR.PATCH[-SUFFIX]".
        """
        base = f"v{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.suffix}" if self.suffix else base

    def __repr__(self: Self) -> str:
        """Return detailed string representation.

        Returns:
            Detailed version representation.
        """
        if self.suffix:
            return (
                f"ReleaseVersion({self.major}, {self.minor}, {self.patch}, "
                f"{self.suffix!r})"
            )
        return f"ReleaseVersion({self.major}, {self.minor}, {self.patch})"
