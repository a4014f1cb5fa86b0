"""Exception hierarchy for Mass Commit.

Every error carries the process exit code the CLI should use for it.
"""

from typing import Dict, Optional

import git

PUSH_REJECTED_EXIT_CODE = 3


def _git_stderr(error: git.exc.GitCommandError) -> str:
    """Unwrap the "stderr: '...'" decoration GitPython adds."""
    text = str(error.stderr or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:"):].strip().strip("'")
    return text


class MassCommitError(Exception):
    """Base exception for all Mass Commit errors."""

    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(MassCommitError):
    """Raised when run configuration is invalid."""


class GitNotFoundError(MassCommitError):
    """Raised when the git executable is not available."""

    def __init__(self):
        super().__init__("git is required but not in PATH")


class RemoteOperationError(MassCommitError):
    """Raised when a git operation (clone, fetch, commit, push) fails."""

    def __init__(
        self,
        operation: str,
        status: Optional[int] = None,
        stderr: str = "",
    ):
        details = {"operation": operation}
        if status is not None:
            details["status"] = str(status)
        super().__init__(f"git {operation} failed", details=details)
        self.operation = operation
        self.status = status
        self.stderr = stderr.strip()

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        """Propagate git's own exit status when it is a usable one."""
        if isinstance(self.status, int) and self.status > 0:
            return self.status
        return 1

    @classmethod
    def from_git_error(
        cls, operation: str, error: git.exc.GitCommandError
    ) -> "RemoteOperationError":
        status = error.status if isinstance(error.status, int) else None
        return cls(operation, status=status, stderr=_git_stderr(error))


class PushRejectedError(RemoteOperationError):
    """Raised when a plain (non-forced) push is refused by the remote."""

    guidance = (
        "Push failed (non-fast-forward or remote rejection).\n"
        "You can retry with --force-push (unsafe) or push the created branch manually."
    )

    def __init__(
        self,
        branch: str = "",
        status: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__("push", status=status, stderr=stderr)
        self.branch = branch
        if branch:
            self.details["branch"] = branch

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        """git reports a refused push as 1, which usage errors already use."""
        if isinstance(self.status, int) and self.status > 1:
            return self.status
        return PUSH_REJECTED_EXIT_CODE

    @classmethod
    def from_git_error(
        cls, operation: str, error: git.exc.GitCommandError, branch: str = ""
    ) -> "PushRejectedError":
        status = error.status if isinstance(error.status, int) else None
        return cls(branch, status=status, stderr=_git_stderr(error))
