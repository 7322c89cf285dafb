"""
git-smart - Small conveniences around everyday git commands.

This package provides a rebase sequence editor, dated work-in-progress branches,
backdated commits, latest version tag lookup, and a protective git wrapper.
"""

__version__ = "0.1.0"

from .models import (
    GitSmartError,
    GitRepositoryError,
    DateParseError,
    HookConfigError,
    Invocation,
    InvocationShape,
    VersionTag,
    WipBranchName,
)
from .git_manager import GitManager
from .sequence_editor import move_first_line_to_end, rewrite_todo_file
from .wip_branch import next_wip_branch, create_wip_branch
from .backdate import resolve_date, commit_with_date
from .version_resolver import resolve_latest_version, latest_version
from .git_safe import classify, run_git_safe

__all__ = [
    "GitSmartError",
    "GitRepositoryError",
    "DateParseError",
    "HookConfigError",
    "Invocation",
    "InvocationShape",
    "VersionTag",
    "WipBranchName",
    "GitManager",
    "move_first_line_to_end",
    "rewrite_todo_file",
    "next_wip_branch",
    "create_wip_branch",
    "resolve_date",
    "commit_with_date",
    "resolve_latest_version",
    "latest_version",
    "classify",
    "run_git_safe",
]
