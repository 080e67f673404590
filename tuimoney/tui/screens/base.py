"""Interface every shell screen implements."""

from abc import ABC, abstractmethod
from typing import Any

from tuimoney.domain.repository import EntryRepository
from tuimoney.tui.actions import Action
from tuimoney.tui.layout import Palette
from tuimoney.tui.navigation import ScreenId, ScreenResult


class Screen(ABC):
    screen_id: ScreenId

    def init(self, repo: EntryRepository) -> None:
        """Called each time the screen becomes active."""

    @abstractmethod
    def render(self, win: Any, palette: Palette) -> None:
        """Draw the screen. Must not change navigation state."""

    @abstractmethod
    def handle_action(self, action: Action, repo: EntryRepository) -> ScreenResult:
        """Update screen state for one action."""
