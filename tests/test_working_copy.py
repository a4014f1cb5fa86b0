"""Tests for the disposable working copy."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mass_commit.core.errors import GitNotFoundError, RemoteOperationError
from mass_commit.core.working_copy import ensure_git_available, working_copy


def test_clone_is_usable_and_removed_afterwards(remote, clone_dirs):
    with working_copy(str(remote)) as repo:
        clone_path = Path(repo.working_tree_dir)
        assert clone_path.exists()
        assert clone_path.parent == clone_dirs
        assert (clone_path / "README.md").exists()
        assert repo.head.is_valid()

    assert not clone_path.exists()
    assert list(clone_dirs.iterdir()) == []


def test_clone_removed_when_block_raises(remote, clone_dirs):
    with pytest.raises(RuntimeError, match="boom"):
        with working_copy(str(remote)):
            raise RuntimeError("boom")

    assert list(clone_dirs.iterdir()) == []


def test_clone_failure_raises_and_cleans_up(temp_dir, clone_dirs):
    with pytest.raises(RemoteOperationError) as exc_info:
        with working_copy(str(temp_dir / "does-not-exist.git")):
            pytest.fail("block must not run when the clone fails")

    error = exc_info.value
    assert error.operation == "clone"
    assert error.exit_code != 0
    assert list(clone_dirs.iterdir()) == []


def test_empty_remote_clones_without_history(empty_remote, clone_dirs):
    with working_copy(str(empty_remote)) as repo:
        assert not repo.head.is_valid()


def test_missing_git_detected():
    with patch("mass_commit.core.working_copy.shutil.which", return_value=None):
        with pytest.raises(GitNotFoundError, match="git is required"):
            ensure_git_available()


def test_git_available():
    assert ensure_git_available()
