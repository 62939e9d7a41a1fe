"""The validated release request built from the command line."""

from typing import Self

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    field_validator,
    model_validator,
)

from .exceptions import InvalidArgumentError
from .release_version import ReleaseVersion
from .types import VersionPart


class ReleaseRequest(BaseModel):
    """What the next release tag should be.

    Either exactly one increment flag, or an explicit version. An explicit
    version takes precedence and suppresses the increment flag.

    Attributes:
        version: Explicit tag to create, e.g. "v5.0.0-beta".
        major: Increment the major component.
        minor: Increment the minor component.
        patch: Increment the patch component.
    """

    model_config = ConfigDict(frozen=True)

    version: str | None = None
    major: bool = False
    minor: bool = False
    patch: bool = False

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str | None) -> str | None:
        if value is not None and not ReleaseVersion.is_valid(value):
            raise ValueError(
                f"Invalid version '{value}'. "
                "Expected format vMAJOR.MINOR.PATCH[-SUFFIX]"
            )
        return value

    @model_validator(mode="after")
    def _check_flags(self: Self) -> Self:
        if len(self.requested_parts) > 1:
            flags = ", ".join(part.value for part in self.requested_parts)
            raise ValueError(
                f"Only one of major, minor, patch may be set, got {flags}"
            )
        if self.version is None and not self.requested_parts:
            raise ValueError(
                "One of major, minor, patch or an explicit version is required"
            )
        return self

    @classmethod
    def build(
        cls,
        version: str | None = None,
        major: bool = False,
        minor: bool = False,
        patch: bool = False,
    ) -> Self:
        """Build a request, converting validation failures.

        Returns:
            The validated request.

        Raises:
            InvalidArgumentError: If the flags conflict, are missing, or the
                explicit version is malformed.
        """
        try:
            return cls(version=version, major=major, minor=minor, patch=patch)
        except ValidationError as e:
            messages = "; ".join(
                str(error["ctx"]["error"]) if "ctx" in error else error["msg"]
                for error in e.errors()
            )
            raise InvalidArgumentError(messages) from e

    @property
    def requested_parts(self: Self) -> list[VersionPart]:
        """Increment flags that were set, most significant first."""
        flags = {
            VersionPart.MAJOR: self.major,
            VersionPart.MINOR: self.minor,
            VersionPart.PATCH: self.patch,
        }
        return [part for part, enabled in flags.items() if enabled]

    @property
    def explicit_version(self: Self) -> ReleaseVersion | None:
        """The explicit version, parsed."""
        return ReleaseVersion.parse(self.version) if self.version else None

    @property
    def part(self: Self) -> VersionPart | None:
        """Component to increment, or None when an explicit version is given."""
        parts = self.requested_parts
        if self.version is not None or not parts:
            return None
        return parts[0]

    @property
    def ignored_parts(self: Self) -> list[VersionPart]:
        """Increment flags suppressed by the explicit version."""
        return self.requested_parts if self.version is not None else []
