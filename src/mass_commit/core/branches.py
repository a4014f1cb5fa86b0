"""Default branch resolution and target branch naming."""

import time
from typing import Callable, Optional, Sequence

import git
from git import Repo

from mass_commit.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_DEFAULT_BRANCH = "main"
REMOTE_NAME = "origin"

BranchLookup = Callable[[Repo], Optional[str]]


def from_remote_show(repo: Repo) -> Optional[str]:
    """Read the advertised HEAD branch from `git remote show origin`."""
    try:
        output = repo.git.remote("show", REMOTE_NAME)
    except git.exc.GitCommandError as e:
        logger.debug("git remote show failed: %s", e)
        return None

    for line in output.splitlines():
        key, sep, value = line.strip().partition(": ")
        if sep and key == "HEAD branch":
            value = value.strip()
            # Empty remotes advertise "(unknown)"
            if value and not value.startswith("("):
                return value
    return None


def from_symbolic_ref(repo: Repo) -> Optional[str]:
    """Read the local symbolic ref refs/remotes/origin/HEAD."""
    try:
        ref = repo.git.symbolic_ref("--short", f"refs/remotes/{REMOTE_NAME}/HEAD")
    except git.exc.GitCommandError as e:
        logger.debug("origin/HEAD symbolic ref unavailable: %s", e)
        return None

    ref = ref.strip()
    prefix = f"{REMOTE_NAME}/"
    if ref.startswith(prefix):
        ref = ref[len(prefix):]
    return ref or None


DEFAULT_LOOKUPS: Sequence[BranchLookup] = (from_remote_show, from_symbolic_ref)


def resolve_default_branch(
    repo: Repo,
    lookups: Sequence[BranchLookup] = DEFAULT_LOOKUPS,
    fallback: str = FALLBACK_DEFAULT_BRANCH,
) -> str:
    """Return the remote's default branch, trying each lookup in order.

    The first lookup yielding a name wins; if none does, `fallback` is used.
    """
    for lookup in lookups:
        branch = lookup(repo)
        if branch:
            logger.debug(
                "Default branch %r resolved by %s",
                branch,
                getattr(lookup, "__name__", lookup),
            )
            return branch
    logger.debug("No lookup resolved the default branch, assuming %r", fallback)
    return fallback


def generated_branch_name(
    prefix: str, clock: Callable[[], float] = time.time
) -> str:
    """Build a new branch name of the form <prefix>-<unix-timestamp>."""
    return f"{prefix}-{int(clock())}"
