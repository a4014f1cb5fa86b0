"""Disposable working copy of the target repository."""

import contextlib
import shutil
import tempfile
from pathlib import Path
from typing import Iterator

import git
from git import Repo

from mass_commit.core.errors import GitNotFoundError, RemoteOperationError
from mass_commit.logging_config import get_logger

logger = get_logger(__name__)

CLONE_DIR_PREFIX = "mass-commit-"


def ensure_git_available() -> str:
    """Return the path of the git executable or raise GitNotFoundError."""
    git_path = shutil.which("git")
    if git_path is None:
        raise GitNotFoundError()
    return git_path


@contextlib.contextmanager
def working_copy(repo_url: str, depth: int = 1) -> Iterator[Repo]:
    """Clone repo_url into a temporary directory and yield the Repo.

    The directory is removed when the block exits, whatever the exit path.
    """
    tmpdir = Path(tempfile.mkdtemp(prefix=CLONE_DIR_PREFIX))
    logger.debug("Working copy directory: %s", tmpdir)
    try:
        try:
            repo = Repo.clone_from(repo_url, tmpdir, depth=depth)
        except git.exc.GitCommandError as e:
            raise RemoteOperationError.from_git_error("clone", e) from e
        try:
            yield repo
        finally:
            repo.close()
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)
        logger.debug("Removed working copy %s", tmpdir)
