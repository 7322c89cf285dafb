"""
Protective wrapper around the git command.

Meant to stand in for ``git`` in an interactive shell (see
``git-smart shell-init``). It:

- asks before ``git co -- {}``, ``git co .`` and ``git reset --hard {}``,
  whose effects on unstaged or untracked files the reflog cannot undo,
- sets ``HUSKY_SKIP_HOOKS`` for ``git cherry-pick``, which has no
  ``--no-verify`` option,
- signals the husky pre-push hook to skip its checks when a push only
  deletes a remote branch.

Everything else passes straight through to git.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from git import Git

from .git_manager import GitManager
from .hook_bypass import default_hook_config_path, read_skip_indicator, sentinel_file
from .models import GitRepositoryError, HookConfigError, Invocation, InvocationShape
from .prompt_interface import UserPrompt

logger = logging.getLogger(__name__)


# `co` is the user's alias for checkout; the long form stays unguarded.
DESTRUCTIVE_PAIRS = {("co", "--"), ("co", "."), ("reset", "--hard")}
HELP_FLAGS = {"--help", "-h"}
DELETE_FLAGS = {"--delete", "-d"}

PUSH_SHAPES = {InvocationShape.PUSH, InvocationShape.PUSH_HELP, InvocationShape.PUSH_DELETE}

HOOK_SKIP_VAR = "HUSKY_SKIP_HOOKS"
DISALLOWED_EXIT_CODE = 1

GitRunner = Callable[[List[str], Dict[str, str]], int]


def classify(args: Sequence[str]) -> Invocation:
    """Classify a git argument vector into one of the recognized shapes."""
    args = list(args)
    if len(args) >= 2 and (args[0], args[1]) in DESTRUCTIVE_PAIRS:
        return Invocation(args, InvocationShape.DESTRUCTIVE)

    subcommand = args[0] if args else None
    if subcommand == "cherry-pick":
        return Invocation(args, InvocationShape.CHERRY_PICK)

    if subcommand == "push":
        if HELP_FLAGS.intersection(args):
            return Invocation(args, InvocationShape.PUSH_HELP)
        # `git push remote :branch` is the old-school delete.
        if DELETE_FLAGS.intersection(args) or (len(args) >= 3 and args[2].startswith(":")):
            return Invocation(args, InvocationShape.PUSH_DELETE)
        return Invocation(args, InvocationShape.PUSH)

    return Invocation(args, InvocationShape.PASSTHROUGH)


def hook_skip_environment(invocation: Invocation, environ: Mapping[str, str]) -> Dict[str, str]:
    """Build the environment for the delegated git call."""
    env = dict(environ)
    if invocation.shape is InvocationShape.CHERRY_PICK and not env.get(HOOK_SKIP_VAR):
        env[HOOK_SKIP_VAR] = "1"
    return env


def git_executable() -> str:
    """The real git binary, as configured for GitPython."""
    return Git.GIT_PYTHON_GIT_EXECUTABLE or "git"


def delegate(args: List[str], env: Dict[str, str]) -> int:
    """Run the real git with inherited stdio and return its exit code.

    While git runs, SIGINT is ignored here so that a Ctrl-C is left to git,
    which cleans up and picks its own exit code. A git killed by a signal is
    reported the way a shell would, as 128 plus the signal number.
    """
    process = subprocess.Popen([git_executable(), *args], env=env)
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        returncode = process.wait()
    finally:
        signal.signal(signal.SIGINT, previous)
    if returncode < 0:
        return 128 - returncode
    return returncode


def _has_pre_push_hook(repo_path: Optional[Path]) -> bool:
    try:
        return GitManager(repo_path).has_hook("pre-push")
    except GitRepositoryError:
        return False


def _bypass_sentinel(
    invocation: Invocation,
    prompt: UserPrompt,
    hook_config_path: Optional[Path],
    repo_path: Optional[Path],
) -> Optional[Path]:
    """Return the sentinel path to manage for a push, or None to leave hooks alone."""
    if invocation.shape not in PUSH_SHAPES:
        return None

    config_path = hook_config_path or default_hook_config_path()
    if not config_path.is_file() or not _has_pre_push_hook(repo_path):
        return None

    if invocation.shape is InvocationShape.PUSH_HELP:
        prompt.notify("Here, let me help you.")
        return None

    try:
        sentinel = read_skip_indicator(config_path)
    except HookConfigError as e:
        logger.warning(f"Not managing pre-push bypass: {e}")
        return None

    if invocation.shape is InvocationShape.PUSH_DELETE:
        if DELETE_FLAGS.intersection(invocation.args):
            prompt.notify("Oh, expletive deleted.")
        else:
            prompt.notify("I'm going to allow this.")
    return sentinel


def run_git_safe(
    args: Sequence[str],
    prompt: UserPrompt,
    environ: Optional[Mapping[str, str]] = None,
    hook_config_path: Optional[Path] = None,
    repo_path: Optional[Path] = None,
    runner: GitRunner = delegate,
) -> int:
    """
    Run git with the protective checks applied.

    Args:
        args: Git arguments, without the leading ``git``
        prompt: Prompt used to confirm destructive commands
        environ: Base environment for git (defaults to the process environment)
        hook_config_path: Hook configuration file (defaults to ``~/.huskyrc``)
        repo_path: Working tree used to look for the pre-push hook
        runner: Callable that runs git and returns its exit code

    Returns:
        Git's exit code, or 1 when the user declined to continue
    """
    invocation = classify(args)
    logger.debug(f"git {' '.join(invocation.args)} -> {invocation.shape.value}")

    if invocation.shape is InvocationShape.DESTRUCTIVE and not prompt.confirm_destructive(invocation.args):
        logger.info(f"Declined: git {' '.join(invocation.args)}")
        return DISALLOWED_EXIT_CODE

    env = hook_skip_environment(invocation, os.environ if environ is None else environ)
    sentinel = _bypass_sentinel(invocation, prompt, hook_config_path, repo_path)

    if sentinel is None:
        return runner(invocation.args, env)

    with sentinel_file(sentinel, active=invocation.shape is InvocationShape.PUSH_DELETE):
        return runner(invocation.args, env)
