"""Bulk commit generation against a remote repository."""

import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

import git
from git import Repo
from rich.console import Console

from mass_commit.core.branches import (
    REMOTE_NAME,
    generated_branch_name,
    resolve_default_branch,
)
from mass_commit.core.errors import (
    ConfigurationError,
    PushRejectedError,
    RemoteOperationError,
)
from mass_commit.core.working_copy import ensure_git_available, working_copy
from mass_commit.logging_config import get_logger
from mass_commit.models.config import RunConfig
from mass_commit.models.result import GeneratedCommit, RunResult

logger = get_logger(__name__)

COMMIT_MESSAGE = "commit #{index}"
CONTENT_LINE = "Commit #{index}"
BOOTSTRAP_MESSAGE = "chore: ensure {file} exists"


class BulkCommitGenerator:
    """Clones a repository, stacks N commits on a branch and publishes it.

    The whole run is a single linear pipeline:
    clone -> resolve default branch -> choose branch -> commit loop -> push.
    The temporary clone is removed on every exit path.
    """

    def __init__(
        self,
        config: RunConfig,
        console: Optional[Console] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.console = console or Console()
        self._clock = clock

    def run(self) -> RunResult:
        """Execute the pipeline and return what it produced."""
        ensure_git_available()

        self.console.print(f"Cloning {self.config.repo}...")
        with working_copy(self.config.repo) as repo:
            default_branch = resolve_default_branch(repo)
            self.console.print(f"Remote default branch: [bold]{default_branch}[/bold]")

            branch = self._select_branch(default_branch)
            self._checkout_base(repo, default_branch, branch)

            bootstrap_sha = None
            if not self.config.allow_empty:
                bootstrap_sha = self._prepare_content_file(repo)

            self.console.print(f"Creating {self.config.count} commits...")
            commits = self._generate_commits(repo)

            if self.config.push:
                self._push(repo, branch)
            else:
                self.console.print(
                    f"Skipping push (--no-push). Branch is local: {branch}"
                )

        self.console.print(
            f"[green]Done. Created {len(commits)} commits on branch: {branch}[/green]"
        )
        return RunResult(
            repo=self.config.repo,
            branch=branch,
            default_branch=default_branch,
            bootstrap_sha=bootstrap_sha,
            commits=commits,
            pushed=self.config.push,
            forced=self.config.push and self.config.force_push,
        )

    def _select_branch(self, default_branch: str) -> str:
        """Decide the target branch once, before any commit is made."""
        if self.config.to_default:
            self.console.print(
                f"[yellow]Operating on remote default branch: {default_branch} "
                "(explicit --to-default)[/yellow]"
            )
            return default_branch

        branch = self.config.branch or generated_branch_name(
            self.config.branch_prefix, self._clock
        )
        self.console.print(f"Creating feature branch: [bold]{branch}[/bold]")
        return branch

    def _checkout_base(self, repo: Repo, default_branch: str, branch: str) -> None:
        """Point the working copy at `branch`, based on the remote default branch."""
        if not self._has_history(repo):
            # Empty remote: nothing to fetch, start the branch unborn
            logger.debug("Clone has no history, starting unborn branch %s", branch)
            try:
                repo.git.symbolic_ref("HEAD", f"refs/heads/{branch}")
            except git.exc.GitCommandError as e:
                raise RemoteOperationError.from_git_error("checkout", e) from e
            return

        try:
            repo.git.fetch("--quiet", REMOTE_NAME, default_branch)
        except git.exc.GitCommandError as e:
            raise RemoteOperationError.from_git_error("fetch", e) from e

        try:
            repo.git.checkout("--quiet", "-B", branch, f"{REMOTE_NAME}/{default_branch}")
        except git.exc.GitCommandError as e:
            raise RemoteOperationError.from_git_error("checkout", e) from e

    def _prepare_content_file(self, repo: Repo) -> Optional[str]:
        """Make sure the content file is tracked; bootstrap an empty branch.

        Returns the bootstrap commit sha when one had to be created.
        """
        content_path = self._content_path(repo)
        content_path.parent.mkdir(parents=True, exist_ok=True)
        content_path.touch(exist_ok=True)
        self._stage(repo)

        if self._has_history(repo):
            return None

        message = BOOTSTRAP_MESSAGE.format(file=self.config.content_file)
        sha = self._commit(repo, message)
        logger.debug("Bootstrap commit %s", sha)
        return sha

    def _generate_commits(self, repo: Repo) -> List[GeneratedCommit]:
        start = int(self._clock()) if self.config.timestamped else None

        commits: List[GeneratedCommit] = []
        for index in range(1, self.config.count + 1):
            if not self.config.allow_empty:
                self._append_line(repo, CONTENT_LINE.format(index=index))
                self._stage(repo)

            timestamp = start + index if start is not None else None
            message = COMMIT_MESSAGE.format(index=index)
            sha = self._commit(repo, message, timestamp)
            logger.debug("Created %s (%s)", message, sha[:10])
            commits.append(
                GeneratedCommit(
                    index=index, hexsha=sha, message=message, timestamp=timestamp
                )
            )
        return commits

    def _push(self, repo: Repo, branch: str) -> None:
        args = [REMOTE_NAME, branch]
        if self.config.force_push:
            self.console.print(
                f"[yellow]Force pushing branch {branch} to {REMOTE_NAME}...[/yellow]"
            )
            args.insert(0, "--force")
        else:
            self.console.print(f"Pushing branch {branch} to {REMOTE_NAME}...")

        try:
            repo.git.push(*args)
        except git.exc.GitCommandError as e:
            if self.config.force_push:
                raise RemoteOperationError.from_git_error("push", e) from e
            raise PushRejectedError.from_git_error("push", e, branch=branch) from e

        self.console.print("Push complete.")

    def _commit(self, repo: Repo, message: str, timestamp: Optional[int] = None) -> str:
        args = ["--quiet", "-m", message]
        if self.config.allow_empty:
            args.insert(0, "--allow-empty")

        try:
            repo.git.commit(*args, env=self._commit_env(timestamp))
        except git.exc.GitCommandError as e:
            raise RemoteOperationError.from_git_error("commit", e) from e
        return repo.head.commit.hexsha

    def _commit_env(self, timestamp: Optional[int]) -> Dict[str, str]:
        env = {
            "GIT_AUTHOR_NAME": self.config.identity_name,
            "GIT_AUTHOR_EMAIL": self.config.identity_email,
            "GIT_COMMITTER_NAME": self.config.identity_name,
            "GIT_COMMITTER_EMAIL": self.config.identity_email,
        }
        if timestamp is not None:
            # Author time and commit time are always equal
            stamp = f"{timestamp} +0000"
            env["GIT_AUTHOR_DATE"] = stamp
            env["GIT_COMMITTER_DATE"] = stamp
        return env

    def _append_line(self, repo: Repo, line: str) -> None:
        content_path = self._content_path(repo)
        with open(content_path, "a+b") as f:
            f.seek(0, 2)
            if f.tell() > 0:
                f.seek(-1, 2)
                if f.read(1) != b"\n":
                    f.write(b"\n")
            f.write(f"{line}\n".encode("utf-8"))

    def _stage(self, repo: Repo) -> None:
        try:
            repo.git.add("--", self.config.content_file)
        except git.exc.GitCommandError as e:
            raise RemoteOperationError.from_git_error("add", e) from e

    def _content_path(self, repo: Repo) -> Path:
        root = Path(repo.working_tree_dir).resolve()
        content_path = (root / self.config.content_file).resolve()
        if root not in content_path.parents:
            raise ConfigurationError(
                f"Invalid --file value: {self.config.content_file!r}",
                details={"reason": "must stay inside the working copy"},
            )
        return content_path

    @staticmethod
    def _has_history(repo: Repo) -> bool:
        return repo.head.is_valid()
