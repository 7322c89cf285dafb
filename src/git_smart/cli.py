"""
Command-line interface for the git-smart tools.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from .backdate import commit_with_date
from .cli_prompt import CliPrompt
from .git_manager import GitManager
from .git_safe import run_git_safe
from .models import DateParseError, GitSmartError
from .sequence_editor import rewrite_todo_file
from .version_resolver import latest_version
from .wip_branch import DEFAULT_WIP_PREFIX, create_wip_branch
from . import __version__ as PACKAGE_VERSION


console = Console()
logger = logging.getLogger(__name__)


def _print_version(ctx, param, value):
    """Eager option callback to print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"git-smart {PACKAGE_VERSION}")
    ctx.exit()


def _default_log_path() -> Path:
    """Determine default log file path (~/.git-smart/git-smart.log)."""
    env_path = os.environ.get("GIT_SMART_LOG")
    if env_path:
        p = Path(env_path).expanduser()
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    base = Path.home() / ".git-smart"
    base.mkdir(parents=True, exist_ok=True)
    return base / "git-smart.log"


class SafeConsoleFilter(logging.Filter):
    """Sanitize record messages for console by replacing unencodable characters.

    This runs before handler emission and is effective with RichHandler which may
    bypass standard formatters for message text.
    """

    def __init__(self, encoding: Optional[str] = None):
        super().__init__()
        self.encoding = encoding or getattr(sys.stderr, "encoding", None) or "utf-8"

    def filter(self, record: logging.LogRecord) -> bool:  # always keep the record
        message = record.getMessage()
        try:
            message.encode(self.encoding, errors="strict")
        except UnicodeEncodeError:
            record.msg = message.encode(self.encoding, errors="replace").decode(self.encoding, errors="replace")
            record.args = ()
        return True


def setup_logging(verbose: bool = False, console_level: Optional[str] = None, log_file: Optional[Path] = None) -> Path:
    """Setup logging to a rotated log file, plus the console when asked.

    Console logging is disabled by default; enable via --verbose or --log-level.
    Returns the log file path.
    """
    log_path = Path(log_file) if log_file else _default_log_path()

    root = logging.getLogger()
    # Clear existing handlers to avoid duplication in tests / repeated invocations
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    file_handler = RotatingFileHandler(
        str(log_path), maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    if verbose or console_level:
        level_map = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
        }
        ch_level = level_map.get((console_level or "info").lower(), logging.INFO)
        console_handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True)
        console_handler.setLevel(ch_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler.addFilter(SafeConsoleFilter(encoding=getattr(sys.stderr, "encoding", None)))
        root.addHandler(console_handler)

    return log_path


@click.group()
@click.option(
    "--version",
    "-V",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose console logging (INFO)")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Console log level. By default, console logging is disabled.",
)
@click.option(
    "--repo-path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to repository (defaults to current directory)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_level: Optional[str], repo_path: Optional[Path]) -> None:
    """git-smart - Small conveniences around everyday git commands."""
    log_path = setup_logging(verbose, console_level=log_level)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["log_path"] = log_path
    ctx.obj["repo_path"] = repo_path.resolve() if isinstance(repo_path, Path) else None
    logger.debug(f"CLI init: cwd={Path.cwd()} repo_path={ctx.obj['repo_path']} args={sys.argv[1:]}")


def _fail(ctx: click.Context, title: str, error: Exception) -> None:
    console.print(f"\n❌ **{title}:** {error}", style="bold red")
    logger.debug(title, exc_info=True)
    ctx.exit(1)


def _unexpected(ctx: click.Context, error: Exception) -> None:
    console.print(f"\n💥 **Unexpected Error:** {error}", style="bold red")
    if ctx.obj.get("verbose"):
        console.print_exception()
    logger.debug("Unexpected error", exc_info=True)
    ctx.exit(1)


@cli.command("seq-swap")
@click.argument("todo_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def seq_swap(ctx: click.Context, todo_file: Path) -> None:
    """
    Move the first rebase instruction in TODO_FILE to the end.

    Use as a sequence editor: GIT_SEQUENCE_EDITOR="git-smart seq-swap" git rebase -i HEAD~2
    """
    try:
        rewrite_todo_file(todo_file)
    except OSError as e:
        _fail(ctx, "Cannot rewrite rebase todo", e)


@cli.command()
@click.option(
    "--dry-run",
    "-v",
    "dry_run",
    is_flag=True,
    help="Print the branch command instead of running it",
)
@click.option(
    "--prefix",
    default=DEFAULT_WIP_PREFIX,
    envvar="GIT_SMART_WIP_PREFIX",
    show_default=True,
    help="Branch name prefix",
)
@click.pass_context
def wip(ctx: click.Context, dry_run: bool, prefix: str) -> None:
    """
    Create and check out the next dated WIP branch, e.g. wip/03-2024-05-01.
    """
    try:
        branch = create_wip_branch(GitManager(ctx.obj.get("repo_path")), dry_run=dry_run, prefix=prefix)
        if dry_run:
            click.echo(f"git checkout -b {branch}")
        else:
            console.print(f"🌱 Switched to a new branch [bold]{branch}[/bold]")
    except GitSmartError as e:
        _fail(ctx, "Git Error", e)
    except Exception as e:
        _unexpected(ctx, e)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("date_expression")
@click.argument("message")
@click.argument("commit_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def backdate(ctx: click.Context, date_expression: str, message: str, commit_args: tuple[str, ...]) -> None:
    """
    Commit with author and committer dates set to DATE_EXPRESSION.

    Example: git-smart backdate "2 days ago" "Fix typo"

    Extra arguments are passed on to git commit.
    """
    try:
        commit = commit_with_date(
            GitManager(ctx.obj.get("repo_path")),
            date_expression,
            message,
            extra_args=list(commit_args),
        )
        console.print(f"🕰️  Committed {commit[:8]} dated {date_expression!r}")
    except DateParseError as e:
        _fail(ctx, "Date Error", e)
    except GitSmartError as e:
        _fail(ctx, "Git Error", e)
    except Exception as e:
        _unexpected(ctx, e)


@cli.command("latest-version")
@click.pass_context
def latest_version_command(ctx: click.Context) -> None:
    """Print the latest semantic version tag (nothing if there is none)."""
    try:
        version = latest_version(GitManager(ctx.obj.get("repo_path")))
    except GitSmartError as e:
        _fail(ctx, "Git Error", e)
        return
    except Exception as e:
        _unexpected(ctx, e)
        return

    if version:
        click.echo(version)


@cli.command("shell-init")
@click.option("--unalias", is_flag=True, help="Print the command that removes the alias instead")
def shell_init(unalias: bool) -> None:
    """
    Print the shell alias that routes git through git-safe.

    Add to your shell rc file: eval "$(git-smart shell-init)"
    """
    if unalias:
        click.echo("unalias git 2> /dev/null")
    else:
        click.echo("alias git='git-safe'")


@cli.command()
def version() -> None:
    """Print the current git-smart version."""
    console.print(f"git-smart {PACKAGE_VERSION}")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n\n🚫 **Operation cancelled by user**", style="bold yellow")
        logger.debug("Top-level cancellation (KeyboardInterrupt)", exc_info=True)
        sys.exit(130)


def git_safe_main() -> None:
    """Entry point for the git-safe wrapper.

    Arguments are read from sys.argv untouched, since every one belongs to git.
    """
    try:
        setup_logging()
    except OSError:
        # git must still run without a writable log file.
        logging.getLogger().addHandler(logging.NullHandler())

    try:
        sys.exit(run_git_safe(sys.argv[1:], CliPrompt()))
    except KeyboardInterrupt:
        logger.debug("git-safe interrupted", exc_info=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
