"""
UI-agnostic prompt interface for user interactions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List


class UserPrompt(ABC):
    """Abstract interface for prompting users for decisions."""

    @abstractmethod
    def confirm_destructive(self, args: List[str]) -> bool:
        """
        Ask user whether a destructive git invocation should run.

        Args:
            args: The git argument vector about to be run

        Returns:
            True if the user wants to continue, False otherwise
        """
        pass

    @abstractmethod
    def notify(self, message: str) -> None:
        """Show a short informational message to the user."""
        pass


class NoOpPrompt(UserPrompt):
    """No-operation prompt that always returns safe defaults."""

    def confirm_destructive(self, args: List[str]) -> bool:
        return False

    def notify(self, message: str) -> None:
        pass
