"""
CLI-specific implementation of the prompt interface.
"""

from __future__ import annotations

from typing import List

import click
from rich.console import Console

from .prompt_interface import UserPrompt


CONFIRM_QUESTION = "Are you sure this is absolutely what you want? [Y/n]"


def is_affirmative(answer: str) -> bool:
    """An empty answer, or one starting with Y or y, means yes."""
    answer = answer.strip()
    return not answer or answer[0].upper() == "Y"


class CliPrompt(UserPrompt):
    """CLI implementation of the prompt interface using click and rich."""

    def __init__(self, console: Console = None):
        self.console = console or Console(stderr=True)

    def confirm_destructive(self, args: List[str]) -> bool:
        """Ask before running a command whose damage the reflog cannot undo."""
        try:
            answer = click.prompt(
                CONFIRM_QUESTION, default="", show_default=False, prompt_suffix=" "
            )
        except (click.Abort, KeyboardInterrupt):
            self.console.print()
            return False

        if is_affirmative(answer):
            self.console.print("YASSSSSSSSSSSSS", style="green")
            return True

        self.console.print("I see.", style="yellow")
        return False

    def notify(self, message: str) -> None:
        self.console.print(message, highlight=False)
