"""
Rebase sequence editor that moves the first todo instruction to the end.

Intended for use as ``GIT_SEQUENCE_EDITOR``, e.g.::

    GIT_SEQUENCE_EDITOR="git-smart seq-swap" git rebase -i HEAD~3

Git writes the todo list, runs the editor on it, and reads it back. The
instruction block is terminated by a blank line followed by git's help
comments, which are left untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def _is_blank(line: str) -> bool:
    return not line.strip()


def move_first_line_to_end(lines: List[str]) -> List[str]:
    """Return lines with the first one moved just before the first blank line.

    With no blank separator the first line is appended at the end. Input with
    fewer than two lines is returned unchanged.
    """
    if len(lines) < 2:
        return list(lines)

    first, rest = lines[0], lines[1:]
    separator = next((i for i, line in enumerate(rest) if _is_blank(line)), len(rest))

    if separator == len(rest) and rest and not rest[-1].endswith(("\n", "\r")):
        # The moved line becomes last; keep the file's missing final newline.
        newline = first[len(first.rstrip("\r\n")):]
        return rest[:-1] + [rest[-1] + newline, first.rstrip("\r\n")]

    return rest[:separator] + [first] + rest[separator:]


def rewrite_todo_file(path: Path) -> None:
    """Rewrite a rebase todo file in place."""
    path = Path(path)
    with open(path, encoding="utf-8", newline="") as f:
        lines = f.readlines()

    updated = move_first_line_to_end(lines)
    if updated == lines:
        logger.debug(f"Nothing to reorder in {path}")
        return

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.writelines(updated)
    logger.info(f"Moved first instruction to the end of {path}: {lines[0].rstrip()}")
