"""Result models describing what a run produced."""

from typing import List, Optional

from pydantic import BaseModel


class GeneratedCommit(BaseModel):
    """A single commit created by the generation loop."""

    index: int
    hexsha: str
    message: str
    timestamp: Optional[int] = None  # Unix seconds, only with deterministic timestamps


class RunResult(BaseModel):
    """Summary of a completed run."""

    repo: str
    branch: str
    default_branch: str
    bootstrap_sha: Optional[str] = None
    commits: List[GeneratedCommit] = []
    pushed: bool = False
    forced: bool = False

    @property
    def count(self) -> int:
        """Number of commits produced by the loop (bootstrap excluded)."""
        return len(self.commits)

    @property
    def head_sha(self) -> Optional[str]:
        """Tip of the target branch after the run."""
        if self.commits:
            return self.commits[-1].hexsha
        return self.bootstrap_sha
