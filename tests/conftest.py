"""Shared fixtures for tagbump tests."""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Self

import pytest

from tagbump import GitRepository, ReleaseTagger, TagbumpConfig


class FakeGit:
    """Stands in for subprocess.run, simulating tags on one working copy.

    Attributes:
        local_tags: Tags in the local namespace.
        remote_tags: Tags on each remote, keyed by remote name.
        remotes: Configured remotes and their URLs.
        unreachable: Remotes whose fetch and ls-remote fail.
        outputs: Canned stdout for non-git commands.
        calls: Every command that was run.
        pushed: (remote, ref) pairs that were pushed.
    """

    def __init__(self: Self) -> None:
        """Start with an origin remote and no tags."""
        self.local_tags: list[str] = []
        self.remote_tags: dict[str, list[str]] = {"origin": []}
        self.remotes: dict[str, str] = {"origin": "git@example.com:org/repo.git"}
        self.unreachable: set[str] = set()
        self.outputs: dict[tuple[str, ...], str] = {}
        self.calls: list[list[str]] = []
        self.pushed: list[tuple[str, str]] = []
        self.annotations: dict[str, str] = {}

    def __call__(
        self: Self, command: Sequence[str], **kwargs: Any
    ) -> subprocess.CompletedProcess[str]:
        """Run a simulated command."""
        args = list(command)
        self.calls.append(args)
        if args[0] != "git":
            if tuple(args) not in self.outputs:
                return self._result(args, 127, stderr=f"{args[0]}: not found")
            return self._result(args, 0, self.outputs[tuple(args)])
        return self._git(args, args[1:])

    def git_calls(self: Self, subcommand: str) -> list[list[str]]:
        """Recorded git invocations of one subcommand."""
        return [c for c in self.calls if c[0] == "git" and c[1] == subcommand]

    @staticmethod
    def _result(
        args: list[str], returncode: int, stdout: str = "", stderr: str = ""
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)

    def _git(  # noqa: PLR0911, C901
        self: Self, args: list[str], rest: list[str]
    ) -> subprocess.CompletedProcess[str]:
        match rest:
            case ["remote"]:
                return self._result(args, 0, "".join(f"{r}\n" for r in self.remotes))
            case ["remote", "add", name, url]:
                if name in self.remotes:
                    return self._result(args, 3, stderr="remote already exists")
                self.remotes[name] = url
                self.remote_tags.setdefault(name, [])
                return self._result(args, 0)
            case ["remote", "remove", name]:
                self.remotes.pop(name)
                return self._result(args, 0)
            case ["tag", "--list"]:
                listing = "".join(f"{t}\n" for t in self.local_tags)
                return self._result(args, 0, listing)
            case ["tag", "--list", tag]:
                found = f"{tag}\n" if tag in self.local_tags else ""
                return self._result(args, 0, found)
            case ["tag", "--delete", *tags]:
                self.local_tags = [t for t in self.local_tags if t not in tags]
                return self._result(args, 0)
            case ["fetch", remote, "--tags"]:
                if remote not in self.remotes or remote in self.unreachable:
                    return self._result(args, 128, stderr="fatal: could not read")
                for tag in self.remote_tags[remote]:
                    if tag not in self.local_tags:
                        self.local_tags.append(tag)
                return self._result(args, 0)
            case ["ls-remote", "--tags", "--refs", remote]:
                if remote not in self.remotes or remote in self.unreachable:
                    return self._result(args, 128, stderr="fatal: could not read")
                lines = "".join(
                    f"{'0' * 40}\trefs/tags/{t}\n" for t in self.remote_tags[remote]
                )
                return self._result(args, 0, lines)
            case ["tag", "--annotate", tag, "--message", message]:
                self.annotations[tag] = message
                return self._create(args, tag)
            case ["tag", tag]:
                return self._create(args, tag)
            case ["push", remote, ref]:
                self.pushed.append((remote, ref))
                return self._result(args, 0)
        return self._result(args, 1, stderr=f"unsupported: {' '.join(args)}")

    def _create(
        self: Self, args: list[str], tag: str
    ) -> subprocess.CompletedProcess[str]:
        if tag in self.local_tags:
            message = f"fatal: tag '{tag}' already exists"
            return self._result(args, 128, stderr=message)
        self.local_tags.append(tag)
        return self._result(args, 0)


@pytest.fixture
def fake_git() -> FakeGit:
    """A simulated git with an empty origin remote."""
    return FakeGit()


@pytest.fixture
def repo(fake_git: FakeGit) -> GitRepository:
    """A repository wrapper backed by the simulated git."""
    return GitRepository(runner=fake_git)


@pytest.fixture
def tagger(repo: GitRepository) -> ReleaseTagger:
    """A tagger with default settings."""
    return ReleaseTagger(repo, TagbumpConfig())


def _git(cwd: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    ).stdout


@pytest.fixture
def git_remote_and_clone(tmp_path: Path) -> tuple[Path, Path]:
    """A bare remote with release tags and a clone of it.

    The remote carries v1.0.0, v2.4.1 and a non-release tag. The clone has
    an extra local tag that does not exist on the remote.
    """
    env_args = ("-c", "user.name=Test", "-c", "user.email=test@example.com")
    seed = tmp_path / "seed"
    seed.mkdir()
    _git(seed, "init", "--quiet")
    (seed / "README").write_text("seed\n")
    _git(seed, "add", "README")
    _git(seed, *env_args, "commit", "--quiet", "-m", "initial")
    for tag in ("v1.0.0", "v2.4.1", "nightly"):
        _git(seed, "tag", tag)

    remote = tmp_path / "remote.git"
    _git(tmp_path, "clone", "--quiet", "--bare", str(seed), str(remote))

    clone = tmp_path / "clone"
    _git(tmp_path, "clone", "--quiet", str(remote), str(clone))
    _git(clone, "tag", "v9.9.9")
    return remote, clone
