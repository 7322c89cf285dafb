"""
Data models for the git-smart tools.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


WIP_NUMBER_WIDTH = 2

VERSION_TAG_RE = re.compile(r"^(?P<prefix>v?)(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?P<suffix>[^\d.].*)?$")


@dataclass
class WipBranchName:
    """A work-in-progress branch name of the form ``prefix/NN-YYYY-MM-DD``."""

    prefix: str
    number: int
    day: str

    @classmethod
    def for_date(cls, prefix: str, number: int, today: date) -> WipBranchName:
        return cls(prefix=prefix, number=number, day=today.strftime("%Y-%m-%d"))

    @classmethod
    def parse(cls, branch: str, prefix: str) -> Optional[WipBranchName]:
        """Parse a branch name, or return None if it does not follow the WIP pattern."""
        match = re.match(rf"^{re.escape(prefix)}/(\d+)-(\d{{4}}-\d{{2}}-\d{{2}})$", branch)
        if not match:
            return None
        return cls(prefix=prefix, number=int(match.group(1)), day=match.group(2))

    def __str__(self) -> str:
        return f"{self.prefix}/{self.number:0{WIP_NUMBER_WIDTH}d}-{self.day}"


@dataclass
class VersionTag:
    """A tag that looks like a semantic version, e.g. ``v1.3.0-rc1``."""

    name: str
    major: int
    minor: int
    patch: int
    suffix: str = ""

    @classmethod
    def parse(cls, name: str) -> Optional[VersionTag]:
        match = VERSION_TAG_RE.match(name.strip())
        if not match:
            return None
        return cls(
            name=name.strip(),
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            suffix=match.group("suffix") or "",
        )

    @property
    def base(self) -> Tuple[int, int, int]:
        """The numeric major.minor.patch triple."""
        return (self.major, self.minor, self.patch)

    @property
    def is_plain(self) -> bool:
        """True when the tag carries no pre-release suffix."""
        return not self.suffix


class InvocationShape(Enum):
    """Recognized shapes of a wrapped git invocation."""

    DESTRUCTIVE = "destructive"
    CHERRY_PICK = "cherry_pick"
    PUSH_HELP = "push_help"
    PUSH_DELETE = "push_delete"
    PUSH = "push"
    PASSTHROUGH = "passthrough"


@dataclass
class Invocation:
    """A git argument vector and the shape it was classified as."""

    args: List[str] = field(default_factory=list)
    shape: InvocationShape = InvocationShape.PASSTHROUGH

    @property
    def subcommand(self) -> Optional[str]:
        return self.args[0] if self.args else None


@dataclass
class ResolvedDate:
    """A date expression resolved to an absolute timestamp."""

    expression: str
    epoch: int
    offset: str

    @property
    def git_date(self) -> str:
        """The timestamp in git's internal ``@<epoch> <tz>`` date format."""
        return f"@{self.epoch} {self.offset}"


class GitSmartError(Exception):
    """Base exception for git-smart operations."""

    pass


class GitRepositoryError(GitSmartError):
    """Exception raised for Git repository related errors."""

    pass


class DateParseError(GitSmartError):
    """Exception raised when a date expression cannot be resolved."""

    def __init__(self, expression: str, backend: str) -> None:
        self.expression = expression
        self.backend = backend
        super().__init__(f"{backend} could not parse date: {expression!r}")


class HookConfigError(GitSmartError):
    """Exception raised when the hook configuration file cannot be used."""

    pass
