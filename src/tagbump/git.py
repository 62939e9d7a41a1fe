"""Thin wrapper over the git executable."""

import logging
import subprocess
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Self

from .exceptions import CommandError, RemoteUnreachableError
from .types import Command, CommandRunner, TagName

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"
DELETE_BATCH_SIZE = 200


def run_command(
    command: Command,
    cwd: Path | None = None,
    runner: CommandRunner = subprocess.run,
) -> str:
    """Run a command and return its standard output.

    Args:
        command: Program and arguments.
        cwd: Working directory for the command.
        runner: Callable with the signature of subprocess.run.

    Returns:
        Captured standard output.

    Raises:
        CommandError: If the command cannot be started or exits non-zero.
    """
    logger.debug("Running: %s", " ".join(command))
    try:
        result = runner(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise CommandError(command, 127, str(e)) from e

    if result.returncode != 0:
        logger.debug("Exited %d: %s", result.returncode, result.stderr.strip())
        raise CommandError(command, result.returncode, result.stderr or "")
    return result.stdout


class GitRepository:
    """Tag and remote operations on one working copy.

    Attributes:
        path: Root of the working copy, or None for the current directory.
        runner: Callable used to execute commands.
    """

    def __init__(
        self: Self,
        path: Path | None = None,
        runner: CommandRunner = subprocess.run,
    ) -> None:
        """Initialize the repository wrapper.

        Args:
            path: Working copy directory. Defaults to the current directory.
            runner: Callable with the signature of subprocess.run.
        """
        self.path = path
        self.runner = runner

    def git(self: Self, *args: str) -> str:
        """Run a git subcommand in the working copy."""
        return run_command(["git", *args], cwd=self.path, runner=self.runner)

    def run(self: Self, command: Command) -> str:
        """Run an arbitrary command in the working copy."""
        return run_command(command, cwd=self.path, runner=self.runner)

    # Remotes
    def remote_exists(self: Self, name: str) -> bool:
        """Check whether a remote is configured."""
        return name in self.git("remote").split()

    def add_remote(self: Self, name: str, url: str) -> None:
        """Add a remote."""
        self.git("remote", "add", name, url)

    def remove_remote(self: Self, name: str) -> None:
        """Remove a remote."""
        self.git("remote", "remove", name)

    @contextmanager
    def temporary_remote(self: Self, name: str, url: str) -> Iterator[str]:
        """Attach a remote for the duration of the block.

        An already configured remote of the same name is used as is and left
        in place.

        Args:
            name: Remote name.
            url: Remote URL.

        Yields:
            The remote name.
        """
        if self.remote_exists(name):
            logger.warning("Remote '%s' already exists, ignoring URL %s", name, url)
            yield name
            return

        self.add_remote(name, url)
        try:
            yield name
        finally:
            self.remove_remote(name)

    # Tags
    def list_tags(self: Self) -> list[TagName]:
        """List local tags."""
        return [line for line in self.git("tag", "--list").splitlines() if line]

    def tag_exists(self: Self, tag: TagName) -> bool:
        """Check whether a local tag exists."""
        return tag in self.git("tag", "--list", tag).splitlines()

    def delete_tags(self: Self, tags: Iterable[TagName]) -> None:
        """Delete local tags, a bounded number per git invocation."""
        names = list(tags)
        for start in range(0, len(names), DELETE_BATCH_SIZE):
            self.git("tag", "--delete", *names[start : start + DELETE_BATCH_SIZE])

    def delete_all_tags(self: Self) -> int:
        """Delete every local tag.

        Returns:
            The number of deleted tags.
        """
        tags = self.list_tags()
        self.delete_tags(tags)
        return len(tags)

    def fetch_tags(self: Self, remote: str) -> None:
        """Fetch all tags from a remote.

        Raises:
            RemoteUnreachableError: If the fetch fails.
        """
        try:
            self.git("fetch", remote, "--tags")
        except CommandError as e:
            raise RemoteUnreachableError(e.command, e.returncode, e.stderr) from e

    def remote_tags(self: Self, remote: str) -> list[TagName]:
        """List tags on a remote without touching local tags.

        Raises:
            RemoteUnreachableError: If the remote cannot be queried.
        """
        try:
            output = self.git("ls-remote", "--tags", "--refs", remote)
        except CommandError as e:
            raise RemoteUnreachableError(e.command, e.returncode, e.stderr) from e

        tags = []
        for line in output.splitlines():
            _, _, ref = line.partition("\t")
            if ref.startswith(TAG_REF_PREFIX):
                tags.append(ref.removeprefix(TAG_REF_PREFIX))
        return tags

    def create_tag(self: Self, tag: TagName, message: str | None = None) -> None:
        """Create a tag at HEAD, annotated if a message is given."""
        if message:
            self.git("tag", "--annotate", tag, "--message", message)
        else:
            self.git("tag", tag)

    def push_tag(self: Self, remote: str, tag: TagName) -> None:
        """Push one tag to a remote."""
        self.git("push", remote, f"{TAG_REF_PREFIX}{tag}")
