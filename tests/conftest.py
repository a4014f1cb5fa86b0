"""Shared fixtures: bare "remote" repositories built with GitPython."""

import tempfile
from pathlib import Path

import pytest

from helpers_git import make_bare_remote, seed_remote


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as directory:
        yield Path(directory)


@pytest.fixture
def empty_remote(temp_dir):
    """An empty bare repository acting as the remote."""
    remote_path = temp_dir / "empty.git"
    make_bare_remote(remote_path).close()
    return remote_path


@pytest.fixture
def remote(temp_dir):
    """A bare repository with one commit on main."""
    remote_path = temp_dir / "remote.git"
    make_bare_remote(remote_path).close()
    seed_remote(remote_path, temp_dir / "seed")
    return remote_path


@pytest.fixture
def rejecting_remote(remote):
    """A seeded remote whose pre-receive hook refuses every push."""
    hook = remote / "hooks" / "pre-receive"
    hook.parent.mkdir(exist_ok=True)
    hook.write_text("#!/bin/sh\necho 'push refused by test hook' >&2\nexit 1\n")
    hook.chmod(0o755)
    return remote


@pytest.fixture
def clone_dirs(temp_dir, monkeypatch):
    """Redirect working copies into a directory the test can inspect."""
    clones = temp_dir / "clones"
    clones.mkdir()
    real_mkdtemp = tempfile.mkdtemp

    def mkdtemp(*args, **kwargs):
        kwargs["dir"] = str(clones)
        return real_mkdtemp(*args, **kwargs)

    monkeypatch.setattr("mass_commit.core.working_copy.tempfile.mkdtemp", mkdtemp)
    return clones
