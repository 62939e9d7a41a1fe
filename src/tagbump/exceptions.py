"""Exceptions raised while resolving and creating release tags."""

from collections.abc import Sequence
from typing import Self


class TagbumpError(Exception):
    """Base exception for all tagbump errors."""


class InvalidArgumentError(TagbumpError, ValueError):
    """Raised when the requested release is conflicting or incomplete."""


class InvalidVersionError(InvalidArgumentError):
    """Raised when a string is not a valid release version."""

    def __init__(self: Self, version: str, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            version: The offending version string.
            message: Optional custom message.
        """
        self.version = version
        super().__init__(
            message
            or (
                f"Invalid version '{version}'. "
                "Expected format vMAJOR.MINOR.PATCH[-SUFFIX]"
            )
        )


class CommandError(TagbumpError):
    """Raised when an external command fails."""

    def __init__(
        self: Self,
        command: Sequence[str],
        returncode: int,
        stderr: str = "",
    ) -> None:
        """Initialize the error.

        Args:
            command: The command line that was executed.
            returncode: Exit status of the command.
            stderr: Captured standard error, if any.
        """
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Command '{' '.join(self.command)}' failed ({returncode})"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class RemoteUnreachableError(CommandError):
    """Raised when tags cannot be read from the remote."""


class NoTagsFoundError(TagbumpError):
    """Raised when the remote has no release tags."""

    def __init__(self: Self, remote: str, detail: str | None = None) -> None:
        """Initialize the error.

        Args:
            remote: Name of the remote that was queried.
            detail: Optional explanation appended to the message.
        """
        self.remote = remote
        message = f"No release tags found on remote '{remote}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class TagAlreadyExistsError(TagbumpError):
    """Raised when the tag to create is already present locally."""

    def __init__(self: Self, tag: str) -> None:
        """Initialize the error.

        Args:
            tag: The tag that already exists.
        """
        self.tag = tag
        super().__init__(f"Tag '{tag}' already exists")
