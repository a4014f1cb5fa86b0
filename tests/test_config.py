"""Tests for RunConfig validation."""

import pytest
from pydantic import ValidationError

from mass_commit.core.errors import ConfigurationError
from mass_commit.models.config import RunConfig


def test_defaults():
    config = RunConfig.build(repo="git@example.com:org/repo.git")

    assert config.count == 100
    assert config.branch is None
    assert config.branch_prefix == "mass/commits"
    assert config.push is True
    assert config.force_push is False
    assert config.to_default is False
    assert config.timestamped is False
    assert config.allow_empty is False
    assert config.content_file == "commits.txt"


@pytest.mark.parametrize("count", [0, -1, "0", "-5", "abc", "1.5", 2.0, True])
def test_invalid_count_rejected(count):
    with pytest.raises(ConfigurationError, match="Invalid --count value"):
        RunConfig.build(repo="/tmp/repo.git", count=count)


def test_numeric_string_count_accepted():
    assert RunConfig.build(repo="/tmp/repo.git", count="7").count == 7


def test_empty_repo_rejected():
    with pytest.raises(ConfigurationError, match="--repo"):
        RunConfig.build(repo="  ")


def test_config_is_immutable():
    config = RunConfig.build(repo="/tmp/repo.git", count=3)
    with pytest.raises(ValidationError):
        config.count = 4


def test_identity_fallback():
    config = RunConfig.build(repo="/tmp/repo.git")
    assert config.identity_name == "script"
    assert config.identity_email == "script@example.com"


def test_identity_override():
    config = RunConfig.build(
        repo="/tmp/repo.git", author_name="Ada", author_email="ada@example.com"
    )
    assert config.identity_name == "Ada"
    assert config.identity_email == "ada@example.com"


def test_blank_branch_treated_as_unset():
    config = RunConfig.build(repo="/tmp/repo.git", branch="", author_name=" ")
    assert config.branch is None
    assert config.identity_name == "script"


def test_configuration_error_exit_code():
    with pytest.raises(ConfigurationError) as exc_info:
        RunConfig.build(repo="/tmp/repo.git", count=0)
    assert exc_info.value.exit_code == 1
    assert "reason" in exc_info.value.details


@pytest.mark.parametrize(
    "content_file",
    [
        "/tmp/outside/victim.txt",
        "../victim.txt",
        "notes/../../victim.txt",
        "C:\\victim.txt",
        "..\\victim.txt",
        ".git/config",
    ],
)
def test_content_file_must_stay_inside_repository(content_file):
    with pytest.raises(ConfigurationError, match="Invalid --file value"):
        RunConfig.build(repo="/tmp/repo.git", content_file=content_file)


def test_nested_content_file_accepted():
    config = RunConfig.build(repo="/tmp/repo.git", content_file="notes/log.txt")
    assert config.content_file == "notes/log.txt"
