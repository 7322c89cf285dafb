"""
Git repository management and operations.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandError

from .models import GitRepositoryError


logger = logging.getLogger(__name__)


class GitManager:
    """Manages Git operations for a single repository."""

    def __init__(self, repo_path: Optional[Path] = None) -> None:
        """Initialize Git manager with optional repository path."""
        self.repo_path = (repo_path or Path.cwd()).resolve()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the Git repository instance."""
        if self._repo is None:
            self._repo = self._discover_repository()
        return self._repo

    def _discover_repository(self) -> Repo:
        """Discover the Git repository from current or specified path."""
        search_path = self.repo_path

        logger.debug(f"Discovering repository in: {search_path}")
        # Walk up the directory tree to find a Git repository
        while search_path != search_path.parent:
            try:
                repo = Repo(search_path)
                logger.debug(f"Found Git repository at: {search_path}")
                return repo
            except (InvalidGitRepositoryError, NoSuchPathError):
                search_path = search_path.parent

        raise GitRepositoryError(
            f"No Git repository found at {self.repo_path} or any parent directory"
        )

    def list_local_branches(self) -> List[str]:
        """List local branch names (full names, including slashes)."""
        return [h.name for h in self.repo.heads]

    def create_and_checkout_branch(self, branch_name: str) -> None:
        """Create a new branch at HEAD and check it out."""
        try:
            self.repo.git.checkout("-b", branch_name)
            logger.info(f"Created and checked out branch: {branch_name}")
        except GitCommandError as e:
            logger.error(f"Error creating branch {branch_name}: {e}")
            raise GitRepositoryError(f"Failed to create branch {branch_name}: {e}")

    def list_tags(self) -> List[str]:
        """List all tag names in the repository."""
        try:
            output = self.repo.git.tag("--list")
        except GitCommandError as e:
            logger.error(f"Error listing tags: {e}")
            raise GitRepositoryError(f"Failed to list tags: {e}")
        return [t.strip() for t in output.splitlines() if t.strip()]

    def commit(self, message: str, extra_args: Optional[List[str]] = None, env: Optional[Dict[str, str]] = None) -> str:
        """Create a commit, with optional environment overrides scoped to this call.

        Returns the hash of the new HEAD commit.
        """
        args = ["-m", message, *(extra_args or [])]
        try:
            with self.repo.git.custom_environment(**(env or {})):
                self.repo.git.commit(*args)
        except GitCommandError as e:
            logger.error(f"Commit failed: {e}")
            raise GitRepositoryError(f"Commit failed: {e}")
        head = self.repo.head.commit.hexsha
        logger.info(f"Created commit {head[:8]}")
        return head

    def has_hook(self, hook_name: str) -> bool:
        """Return True if the repository has the named hook installed."""
        hooks_dir = Path(self.repo.common_dir) / "hooks"
        return (hooks_dir / hook_name).is_file()
