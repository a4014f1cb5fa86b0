"""Main CLI interface for Mass Commit."""

import sys
from typing import Optional

import click
from rich.console import Console

from mass_commit.core.errors import MassCommitError, PushRejectedError
from mass_commit.core.generator import BulkCommitGenerator
from mass_commit.logging_config import setup_logging
from mass_commit.models.config import (
    DEFAULT_BRANCH_PREFIX,
    DEFAULT_CONTENT_FILE,
    DEFAULT_COUNT,
    RunConfig,
)

ENV_PREFIX = "MASS_COMMIT"
USAGE_ERROR_EXIT_CODE = 1


class MassCommitCommand(click.Command):
    """Command that reports usage errors (unknown flag, bad --count) with exit 1."""

    def parse_args(self, ctx: click.Context, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = USAGE_ERROR_EXIT_CODE
            raise


@click.command(
    cls=MassCommitCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--repo", required=True, help="Clone URL (SSH or HTTPS)")
@click.option(
    "--count",
    type=click.IntRange(min=1),
    default=DEFAULT_COUNT,
    show_default=True,
    help="Number of commits to create",
)
@click.option(
    "--branch",
    default=None,
    help=f"Name of branch to create and push [default: {DEFAULT_BRANCH_PREFIX}-<ts>]",
)
@click.option(
    "--branch-prefix",
    default=DEFAULT_BRANCH_PREFIX,
    show_default=True,
    help="Prefix for generated branch names",
)
@click.option(
    "--to-default",
    is_flag=True,
    help="Make commits directly on the remote default branch (potentially disruptive)",
)
@click.option("--no-push", is_flag=True, help="Do not push the branch (local only)")
@click.option("--force-push", is_flag=True, help="Force push the branch (unsafe)")
@click.option(
    "--author-name",
    envvar="GIT_AUTHOR_NAME",
    default=None,
    help="Commit author name for this run",
)
@click.option(
    "--author-email",
    envvar="GIT_AUTHOR_EMAIL",
    default=None,
    help="Commit author email for this run",
)
@click.option(
    "--timestamped",
    is_flag=True,
    help="Assign incrementing commit timestamps (deterministic times)",
)
@click.option(
    "--allow-empty",
    is_flag=True,
    help="Create empty commits instead of modifying a file",
)
@click.option(
    "--file",
    "content_file",
    default=DEFAULT_CONTENT_FILE,
    show_default=True,
    help="File that receives one appended line per commit",
)
@click.option("-v", "--verbose", is_flag=True, help="Show git command traces")
@click.option("-q", "--quiet", is_flag=True, help="Only print errors")
@click.version_option(package_name="mass-commit")
def cli(
    repo: str,
    count: int,
    branch: Optional[str],
    branch_prefix: str,
    to_default: bool,
    no_push: bool,
    force_push: bool,
    author_name: Optional[str],
    author_email: Optional[str],
    timestamped: bool,
    allow_empty: bool,
    content_file: str,
    verbose: bool,
    quiet: bool,
):
    """Create many commits on a remote repository and push them.

    By default the repository is cloned, a new branch named
    mass/commits-<ts> is created, COUNT commits are made by appending to
    commits.txt and that new branch is pushed.
    """
    setup_logging(verbose=verbose, quiet=quiet)
    console = Console(quiet=quiet)
    err_console = Console(stderr=True)

    try:
        config = RunConfig.build(
            repo=repo,
            count=count,
            branch=branch,
            branch_prefix=branch_prefix,
            to_default=to_default,
            push=not no_push,
            force_push=force_push,
            author_name=author_name,
            author_email=author_email,
            timestamped=timestamped,
            allow_empty=allow_empty,
            content_file=content_file,
        )
        BulkCommitGenerator(config, console=console).run()
    except PushRejectedError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        if e.stderr:
            err_console.print(e.stderr, markup=False, highlight=False)
        err_console.print(e.guidance, markup=False, highlight=False)
        sys.exit(e.exit_code)
    except MassCommitError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        stderr = getattr(e, "stderr", "")
        if stderr:
            err_console.print(stderr, markup=False, highlight=False)
        sys.exit(e.exit_code)


def main():
    """Console script entry point."""
    cli(auto_envvar_prefix=ENV_PREFIX)


if __name__ == "__main__":
    main()
