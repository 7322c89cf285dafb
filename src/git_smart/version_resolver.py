"""
Resolve the latest semantic version tag.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple, Union

from .git_manager import GitManager
from .models import VersionTag

logger = logging.getLogger(__name__)


def suffix_sort_key(suffix: str) -> Tuple[Tuple[int, Union[int, str]], ...]:
    """Natural ordering key for a pre-release suffix, so ``-rc10`` sorts after ``-rc2``."""
    parts = re.findall(r"\d+|\D+", suffix)
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in parts)


def parse_version_tags(tag_names: Iterable[str]) -> List[VersionTag]:
    """Parse the tag names that look like versions, dropping the rest."""
    return [tag for name in tag_names if (tag := VersionTag.parse(name)) is not None]


def resolve_latest_version(tag_names: Iterable[str]) -> Optional[str]:
    """Return the name of the latest version tag, or None if there is none.

    The highest major.minor.patch wins. A plain release tag for that version
    is preferred; if only pre-release tags carry it, the one with the
    greatest suffix is returned.
    """
    tags = parse_version_tags(tag_names)
    if not tags:
        return None

    base = max(tag.base for tag in tags)
    candidates = [tag for tag in tags if tag.base == base]

    plain = [tag for tag in candidates if tag.is_plain]
    if plain:
        # Prefer "v1.2.3" over "1.2.3" when both exist.
        return sorted(plain, key=lambda tag: tag.name)[-1].name

    latest = max(candidates, key=lambda tag: suffix_sort_key(tag.suffix))
    logger.debug(f"No plain tag for {'.'.join(map(str, base))}; using pre-release {latest.name}")
    return latest.name


def latest_version(git_manager: GitManager) -> Optional[str]:
    """Resolve the latest version tag in a repository."""
    return resolve_latest_version(git_manager.list_tags())
