"""
Commit with a faked author and committer date.

The date expression is checked by two independent parsers, the system
``date`` command and the ``dateparser`` library, and both must accept it.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional

from .git_manager import GitManager
from .models import DateParseError, ResolvedDate

logger = logging.getLogger(__name__)


SYSTEM_DATE_BACKEND = "date"
DATEPARSER_BACKEND = "dateparser"

# Two parses of a relative expression run moments apart.
AGREEMENT_TOLERANCE_SECONDS = 60


def _parse_with_system_date(expression: str) -> ResolvedDate:
    try:
        result = subprocess.run(
            ["date", "-d", expression, "+%s %z"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f"date rejected {expression!r}: {e}")
        raise DateParseError(expression, SYSTEM_DATE_BACKEND) from e

    epoch, offset = result.stdout.split()
    return ResolvedDate(expression=expression, epoch=int(epoch), offset=offset)


def _parse_with_dateparser(expression: str) -> float:
    import dateparser

    parsed = dateparser.parse(expression)
    if parsed is None:
        raise DateParseError(expression, DATEPARSER_BACKEND)
    return parsed.timestamp()


def resolve_date(expression: str) -> ResolvedDate:
    """Resolve a relative or absolute date expression to a timestamp.

    Raises:
        DateParseError: If either parser rejects the expression. The error's
            ``backend`` names the parser that failed.
    """
    resolved = _parse_with_system_date(expression)
    secondary = _parse_with_dateparser(expression)

    if abs(secondary - resolved.epoch) > AGREEMENT_TOLERANCE_SECONDS:
        logger.warning(
            f"Parsers disagree on {expression!r}: date={resolved.epoch} dateparser={int(secondary)}; "
            "using date"
        )
    return resolved


def commit_with_date(
    git_manager: GitManager,
    expression: str,
    message: str,
    extra_args: Optional[List[str]] = None,
) -> str:
    """Commit with author and committer dates set to the resolved expression.

    The date variables only apply to the delegated commit; the calling
    process environment is left unchanged.

    Returns the new commit hash.
    """
    resolved = resolve_date(expression)
    env = {
        "GIT_AUTHOR_DATE": resolved.git_date,
        "GIT_COMMITTER_DATE": resolved.git_date,
    }
    logger.info(f"Committing with date {resolved.git_date} ({expression!r})")
    return git_manager.commit(message, extra_args=extra_args, env=env)
