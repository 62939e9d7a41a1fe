"""Command-line interface for tagbump."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape

from ..config import ConfigError, load_config
from ..exceptions import InvalidArgumentError, TagbumpError
from ..git import GitRepository
from ..request import ReleaseRequest
from ..tagger import ReleaseTagger
from ._helpers import (
    console,
    format_transition,
    print_error,
    print_success,
    print_warning,
    setup_logging,
)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    help="Create the next semantic-version release tag from the latest remote tag",
    context_settings=CONTEXT_SETTINGS,
    add_completion=False,
)


@app.command(context_settings=CONTEXT_SETTINGS)
def main(  # noqa: PLR0913
    ctx: typer.Context,
    version: Annotated[
        str | None,
        typer.Option(
            ...,
            "--version",
            "-v",
            help="Explicit tag, e.g. v1.2.3 or v1.2.3-beta. Ignores -m/-i/-p",
        ),
    ] = None,
    major: Annotated[
        bool,
        typer.Option(..., "--major", "-m", help="Increment major, reset minor/patch"),
    ] = False,
    minor: Annotated[
        bool, typer.Option(..., "--minor", "-i", help="Increment minor, reset patch")
    ] = False,
    patch: Annotated[
        bool, typer.Option(..., "--patch", "-p", help="Increment patch")
    ] = False,
    remote: Annotated[
        str | None,
        typer.Option(..., "--remote", "-r", help="Remote holding release tags"),
    ] = None,
    remote_url: Annotated[
        str | None,
        typer.Option(
            ..., "--remote-url", help="Attach the remote at this URL for the run"
        ),
    ] = None,
    sync: Annotated[
        bool | None,
        typer.Option(
            ...,
            "--sync/--no-sync",
            help=(
                "Delete local tags and refetch them from the remote, or query "
                "the remote read-only"
            ),
        ),
    ] = None,
    push: Annotated[
        bool | None,
        typer.Option(
            ..., "--push/--no-push", help="Push the new tag to the remote"
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            ..., "--dry-run/--no-dry-run", "-n", help="Print the next tag only"
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            ...,
            "--config",
            "-c",
            help="Path to config file (pyproject.toml or tagbump.toml)",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option(..., "--verbose", help="Log executed commands")
    ] = False,
) -> None:
    """Tag the next release.

    Examples:
        # Latest remote tag v2.4.1 becomes v2.4.2
        tagbump -p

        # Latest remote tag v2.4.1 becomes v3.0.0
        tagbump -m

        # Tag an explicit version regardless of the remote
        tagbump -v v5.0.0-beta
    """
    setup_logging(verbose)

    try:
        request = ReleaseRequest.build(
            version=version, major=major, minor=minor, patch=patch
        )
    except InvalidArgumentError as e:
        print_error(str(e))
        console.print(escape(ctx.get_usage()))
        raise typer.Exit(1) from e

    for part in request.ignored_parts:
        print_warning(
            f"Explicit version {request.version} given, ignoring --{part.value}"
        )

    try:
        settings = load_config(config).merged(
            remote=remote,
            remote_url=remote_url,
            sync_tags=sync,
            push=push,
            dry_run=dry_run,
        )
        tagger = ReleaseTagger(GitRepository(), settings)
        result = tagger.release(request)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except ValidationError as e:
        print_error(f"Invalid option: {e.errors()[0]['msg']}")
        raise typer.Exit(1) from e
    except TagbumpError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    transition = format_transition(result.previous, result.new)
    if not result.created:
        console.print(f"[yellow]Dry run:[/yellow] {transition}")
        return

    print_success(f"Created tag {result.new}")
    if result.pushed:
        print_success(f"Pushed tag {result.new} to {settings.remote}")
    console.print(f"[dim]{transition}[/dim]")


if __name__ == "__main__":
    app()
