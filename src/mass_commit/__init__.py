"""Mass Commit - bulk commit generation against a remote git repository."""

import os

# GitPython refuses to import without a git executable; let it import so the
# missing executable is reported by ensure_git_available() instead.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

__version__ = "0.1.0"
