"""
Husky hook bypass through a sentinel touch file.

The user's ``~/.huskyrc`` is a shell script that husky sources before the
pre-push hook. It defines ``USER_HUSKY_RC_SKIP_INDICATOR``, the path of a
touch file: while that file exists, the script skips its checks. The file's
existence is the whole contract, so it must never outlive a single wrapped
git call. Not safe for concurrent invocations.
"""

from __future__ import annotations

import logging
import os
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .models import HookConfigError

logger = logging.getLogger(__name__)


SKIP_INDICATOR_VAR = "USER_HUSKY_RC_SKIP_INDICATOR"

# The hook config is sourced with `--source` and the variable read back.
_RESOLVE_SCRIPT = f'. "$1" --source >/dev/null; printf %s "${SKIP_INDICATOR_VAR}"'


def default_hook_config_path() -> Path:
    """Location of the hook configuration file (``GIT_SMART_HUSKYRC`` overrides ``~/.huskyrc``)."""
    env_path = os.environ.get("GIT_SMART_HUSKYRC")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".huskyrc"


def read_skip_indicator(config_path: Path) -> Path:
    """Resolve the sentinel file path by sourcing the hook configuration file.

    The file is evaluated by bash, so defaults, command substitutions and
    earlier variables give the same path the hook itself will check.

    Raises:
        HookConfigError: If the file cannot be sourced or assigns no path.
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise HookConfigError(f"Cannot read hook config {config_path}: no such file")

    try:
        result = subprocess.run(
            ["bash", "-c", _RESOLVE_SCRIPT, "_", str(config_path)],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=True,
        )
    except OSError as e:
        raise HookConfigError(f"Cannot run bash to read {config_path}: {e}") from e
    except subprocess.CalledProcessError as e:
        raise HookConfigError(
            f"Sourcing {config_path} failed with exit code {e.returncode}: {e.stderr.strip()}"
        ) from e

    value = result.stdout.strip()
    if not value:
        raise HookConfigError(f"{SKIP_INDICATOR_VAR} is not set in {config_path}")

    logger.debug(f"{SKIP_INDICATOR_VAR} resolves to {value}")
    return Path(value)


def remove_sentinel(path: Path) -> None:
    if path.is_file():
        path.unlink()
        logger.debug(f"Removed hook skip sentinel {path}")


@contextmanager
def sentinel_file(path: Path, active: bool) -> Iterator[Path]:
    """Scope the sentinel file to the body of the ``with`` block.

    A stale sentinel left by an earlier run is removed on entry. When
    ``active`` the file is created, and it is removed again on exit whether
    or not the body raised.
    """
    remove_sentinel(path)
    if active:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        logger.info(f"Created hook skip sentinel {path}")
    try:
        yield path
    finally:
        remove_sentinel(path)
