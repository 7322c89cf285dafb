"""
Shared pytest fixtures for git-smart tests.
"""

import subprocess
from pathlib import Path

import pytest


def run_git(repo: Path, *args: str) -> str:
    """Run git in repo and return stripped stdout."""
    result = subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep logs and hook config away from the real home directory."""
    monkeypatch.setenv("GIT_SMART_LOG", str(tmp_path / "logs" / "git-smart.log"))
    monkeypatch.setenv("GIT_SMART_HUSKYRC", str(tmp_path / "no-huskyrc"))
    monkeypatch.delenv("GIT_SMART_WIP_PREFIX", raising=False)
    monkeypatch.delenv("HUSKY_SKIP_HOOKS", raising=False)
    monkeypatch.delenv("USER_HUSKY_RC_SKIP_INDICATOR", raising=False)
    monkeypatch.delenv("GIT_AUTHOR_DATE", raising=False)
    monkeypatch.delenv("GIT_COMMITTER_DATE", raising=False)


@pytest.fixture
def git_repo(tmp_path):
    """
    Create a temporary git repository with one commit.

    Returns:
        Path: Path to the temporary git repository
    """
    repo = tmp_path / "test-repo"
    repo.mkdir()

    run_git(repo, "init")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("# Test Repo\n")
    run_git(repo, "add", "README.md")
    run_git(repo, "commit", "-m", "Initial commit")

    return repo


@pytest.fixture
def git_cmd():
    """Callable running git in a repository and returning its stripped stdout."""
    return run_git
