"""Shell state: the active screen, its siblings and the repository they share."""

from datetime import date
from typing import Any, Callable

import structlog

from tuimoney.domain.repository import EntryRepository
from tuimoney.tui.actions import Action, ActionKind
from tuimoney.tui.layout import Palette
from tuimoney.tui.navigation import ScreenId, transition
from tuimoney.tui.screens import CreateUserScreen, DashboardScreen, LoginScreen, Screen

logger = structlog.get_logger(__name__)


class App:
    """Routes actions to the active screen and applies screen transitions.

    The app never touches the terminal, so it can be driven directly in tests.
    """

    def __init__(
        self,
        repo: EntryRepository,
        *,
        users: list[str] | None = None,
        currency_symbol: str = "$",
        today: Callable[[], date] = date.today,
        start: ScreenId = ScreenId.LOGIN,
    ) -> None:
        self.repo = repo
        self.screens: dict[ScreenId, Screen] = {
            ScreenId.LOGIN: LoginScreen(users),
            ScreenId.CREATE_USER: CreateUserScreen(),
            ScreenId.DASHBOARD: DashboardScreen(currency_symbol, today),
        }
        self.current = start
        self.should_quit = False
        self.screen.init(repo)

    @property
    def screen(self) -> Screen:
        return self.screens[self.current]

    def switch_screen(self, target: ScreenId) -> None:
        logger.debug("screen_switched", source=self.current.value, target=target.value)
        self.current = target
        self.screen.init(self.repo)

    def apply(self, action: Action) -> bool:
        """Handle one action.

        Returns:
            True once the shell should stop.
        """
        if action.kind is ActionKind.QUIT:
            self.should_quit = True
        elif action.kind is ActionKind.GO:
            if action.target is not None:
                self.switch_screen(action.target)
        elif action.kind is not ActionKind.NONE:
            result = self.screen.handle_action(action, self.repo)
            target, self.should_quit = transition(self.current, result)
            if target is not self.current:
                self.switch_screen(target)
        return self.should_quit

    def render(self, win: Any, palette: Palette) -> None:
        self.screen.render(win, palette)
