"""Data models for Mass Commit."""

from .config import RunConfig
from .result import GeneratedCommit, RunResult

__all__ = ["RunConfig", "GeneratedCommit", "RunResult"]
