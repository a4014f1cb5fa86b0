"""Run configuration for the bulk commit generator."""

from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from mass_commit.core.errors import ConfigurationError

DEFAULT_COUNT = 100
DEFAULT_BRANCH_PREFIX = "mass/commits"
DEFAULT_CONTENT_FILE = "commits.txt"
FALLBACK_AUTHOR_NAME = "script"
FALLBACK_AUTHOR_EMAIL = "script@example.com"

# Fields whose command line flag is not the field name
FLAG_NAMES = {"content_file": "file"}


class RunConfig(BaseModel):
    """Immutable configuration for one run, built once from parsed flags."""

    repo: str
    count: int = Field(default=DEFAULT_COUNT, gt=0)
    branch: Optional[str] = None
    branch_prefix: str = DEFAULT_BRANCH_PREFIX
    to_default: bool = False
    push: bool = True
    force_push: bool = False
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    timestamped: bool = False
    allow_empty: bool = False
    content_file: str = DEFAULT_CONTENT_FILE

    model_config = {"frozen": True}

    @field_validator("count", mode="before")
    @classmethod
    def _reject_non_integer_count(cls, value):
        # bool is an int subclass and "1.5"-style strings must not be coerced
        if isinstance(value, bool) or isinstance(value, float):
            raise ValueError("count must be a positive integer")
        if isinstance(value, str) and not value.strip().isdigit():
            raise ValueError("count must be a positive integer")
        return value

    @field_validator("repo", "branch_prefix", "content_file")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("content_file")
    @classmethod
    def _relative_to_working_copy(cls, value: str) -> str:
        # The file lives inside the disposable clone, never next to it
        for path in (PurePosixPath(value), PureWindowsPath(value)):
            if path.is_absolute() or path.anchor:
                raise ValueError("must be a path relative to the repository root")
            if ".." in path.parts:
                raise ValueError("must not leave the repository root")
            if path.parts and path.parts[0] == ".git":
                raise ValueError("must not point into .git")
        return value

    @field_validator("branch", "author_name", "author_email")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def build(cls, **values) -> "RunConfig":
        """Validate values into a RunConfig, raising ConfigurationError on failure."""
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "config"
            flag = FLAG_NAMES.get(field, field).replace("_", "-")
            raise ConfigurationError(
                f"Invalid --{flag} value: {values.get(field)!r}",
                details={"reason": first.get("msg", "invalid value")},
            ) from e

    @property
    def identity_name(self) -> str:
        """Author/committer name applied to every generated commit."""
        return self.author_name or FALLBACK_AUTHOR_NAME

    @property
    def identity_email(self) -> str:
        """Author/committer email applied to every generated commit."""
        return self.author_email or FALLBACK_AUTHOR_EMAIL
