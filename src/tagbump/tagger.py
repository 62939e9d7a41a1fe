"""Resolves the latest release tag on a remote and creates the next one."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Self

from .config import TagbumpConfig
from .exceptions import (
    InvalidVersionError,
    NoTagsFoundError,
    TagAlreadyExistsError,
    TagbumpError,
)
from .git import GitRepository
from .release_version import ReleaseVersion
from .request import ReleaseRequest
from .types import TagName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagResult:
    """Outcome of a release.

    Attributes:
        previous: Latest remote version before the release, if known.
        new: The version that was tagged.
        created: False for a dry run.
        pushed: Whether the tag was pushed to the remote.
    """

    previous: ReleaseVersion | None
    new: ReleaseVersion
    created: bool = True
    pushed: bool = False


def latest_version(tags: Iterable[TagName]) -> ReleaseVersion | None:
    """Return the highest release version among tags.

    Tags that are not release versions are ignored.
    """
    versions = [
        ReleaseVersion.parse(tag) for tag in tags if ReleaseVersion.is_valid(tag)
    ]
    return max(versions, default=None)


def compute_next_version(
    current: ReleaseVersion | None, request: ReleaseRequest
) -> ReleaseVersion:
    """Compute the version to tag.

    An explicit version is returned unchanged; it is not compared with the
    current one. Otherwise the requested component of ``current`` is
    incremented and every lower component reset to zero.

    Args:
        current: Latest released version.
        request: Validated release request.

    Returns:
        The next version.

    Raises:
        ValueError: If an increment is requested without a current version, or
            the request carries neither a version nor an increment.
    """
    explicit = request.explicit_version
    if explicit is not None:
        return explicit
    if current is None:
        raise ValueError("Cannot increment without a current version")
    part = request.part
    if part is None:
        raise ValueError("Request has neither an explicit version nor an increment")
    return current.bump(part)


class ReleaseTagger:
    """Creates release tags from the latest tag on a remote.

    Attributes:
        repo: The working copy to tag.
        config: Settings for remote access and tag creation.
    """

    def __init__(
        self: Self,
        repo: GitRepository | None = None,
        config: TagbumpConfig | None = None,
    ) -> None:
        """Initialize the tagger.

        Args:
            repo: Working copy. Defaults to the current directory.
            config: Settings. Defaults to TagbumpConfig().
        """
        self.repo = repo or GitRepository()
        self.config = config or TagbumpConfig()

    @property
    def remote(self: Self) -> str:
        """Name of the remote tags are read from."""
        return self.config.remote

    @contextmanager
    def attached_remote(self: Self) -> Iterator[str]:
        """Attach the configured remote URL, if any, for the block."""
        if self.config.remote_url is None:
            yield self.remote
            return
        with self.repo.temporary_remote(self.remote, self.config.remote_url) as name:
            yield name

    def sync_tags(self: Self) -> None:
        """Replace every local tag with the tags on the remote.

        Raises:
            RemoteUnreachableError: If the remote cannot be fetched. Local tags
                are already deleted at that point.
        """
        deleted = self.repo.delete_all_tags()
        logger.info("Deleted %d local tags", deleted)
        self.repo.fetch_tags(self.remote)
        logger.info("Fetched tags from '%s'", self.remote)

    def _remote_tag_names(self: Self) -> list[TagName]:
        if self.config.sync_tags:
            self.sync_tags()
            return self.repo.list_tags()
        return self.repo.remote_tags(self.remote)

    def resolve_latest_remote_version(self: Self) -> ReleaseVersion:
        """Determine the latest release version on the remote.

        Returns:
            The latest version.

        Raises:
            RemoteUnreachableError: If the remote cannot be reached.
            NoTagsFoundError: If the remote has no release tags.
            CommandError: If the latest tag command fails.
        """
        tags = self._remote_tag_names()

        if self.config.latest_tag_command:
            output = self.repo.run(self.config.latest_tag_command)
            lines = [line.strip() for line in output.splitlines() if line.strip()]
            if not lines:
                raise NoTagsFoundError(
                    self.remote, "latest tag command printed nothing"
                )
            try:
                return ReleaseVersion.parse(lines[-1])
            except InvalidVersionError as e:
                raise NoTagsFoundError(self.remote, str(e)) from e

        latest = latest_version(tags)
        if latest is None:
            raise NoTagsFoundError(self.remote)
        logger.info("Latest release on '%s' is %s", self.remote, latest)
        return latest

    def compute_next_version(
        self: Self, current: ReleaseVersion | None, request: ReleaseRequest
    ) -> ReleaseVersion:
        """Compute the version to tag. See compute_next_version()."""
        return compute_next_version(current, request)

    def create_tag(
        self: Self,
        version: ReleaseVersion,
        previous: ReleaseVersion | None = None,
    ) -> TagResult:
        """Create the tag for a version in the local working copy.

        Args:
            version: Version to tag.
            previous: Latest remote version, reported alongside the new one.

        Returns:
            The previous and new versions.

        Raises:
            TagAlreadyExistsError: If the tag already exists locally.
            CommandError: If git fails to create the tag.
        """
        if self.repo.tag_exists(version.tag):
            raise TagAlreadyExistsError(version.tag)
        self.repo.create_tag(version.tag, self.config.tag_message)
        logger.info("Created tag %s", version.tag)
        return TagResult(previous=previous, new=version)

    def push_tag(self: Self, version: ReleaseVersion) -> None:
        """Push a created tag to the remote."""
        self.repo.push_tag(self.remote, version.tag)
        logger.info("Pushed tag %s to '%s'", version.tag, self.remote)

    def _resolve_for_report(self: Self) -> ReleaseVersion | None:
        try:
            return self.resolve_latest_remote_version()
        except NoTagsFoundError as e:
            logger.warning("%s", e)
            return None

    def release(self: Self, request: ReleaseRequest) -> TagResult:
        """Run the whole release sequence.

        Synchronizes tags with the remote, resolves the latest version,
        computes the next one, and creates (and optionally pushes) the tag.

        Args:
            request: Validated release request.

        Returns:
            The previous and new versions.

        Raises:
            TagbumpError: If any step fails.
        """
        with self.attached_remote():
            if request.explicit_version is not None:
                previous = self._resolve_for_report()
            else:
                previous = self.resolve_latest_remote_version()

            new = self.compute_next_version(previous, request)

            if self.config.dry_run:
                return TagResult(previous=previous, new=new, created=False)

            result = self.create_tag(new, previous)
            if self.config.push:
                try:
                    self.push_tag(new)
                except TagbumpError:
                    logger.error("Tag %s was created but not pushed", new.tag)
                    raise
                return TagResult(previous=previous, new=new, pushed=True)
            return result
