"""
Work-in-progress branch creation.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from .git_manager import GitManager
from .models import WipBranchName

logger = logging.getLogger(__name__)


DEFAULT_WIP_PREFIX = "wip"


def next_wip_branch(existing: Iterable[str], today: date, prefix: str = DEFAULT_WIP_PREFIX) -> WipBranchName:
    """Compute the next WIP branch name from the existing branch names.

    The sequence number is one more than the highest number among branches
    that match ``prefix/NN-...``, or 1 when there are none.
    """
    numbers = [
        parsed.number
        for branch in existing
        if (parsed := WipBranchName.parse(branch, prefix)) is not None
    ]
    highest = max(numbers, default=0)
    return WipBranchName.for_date(prefix, highest + 1, today)


def create_wip_branch(
    git_manager: GitManager,
    dry_run: bool = False,
    prefix: str = DEFAULT_WIP_PREFIX,
    today: Optional[date] = None,
) -> WipBranchName:
    """Create and check out the next WIP branch.

    In dry-run mode nothing is created; the caller prints the equivalent
    command instead.
    """
    branch = next_wip_branch(git_manager.list_local_branches(), today or date.today(), prefix)
    if dry_run:
        logger.debug(f"Dry run: would create {branch}")
        return branch

    git_manager.create_and_checkout_branch(str(branch))
    return branch
