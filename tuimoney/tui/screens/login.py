"""Login screen.

Schematic only: there is no authentication, any user and password opens the
dashboard.
"""

from enum import Enum, auto
from typing import Any

from tuimoney.domain.repository import EntryRepository
from tuimoney.tui.actions import Action, ActionKind
from tuimoney.tui.layout import Palette, button, centered_origin, draw_box, field, put, put_segments
from tuimoney.tui.navigation import ScreenId, ScreenResult
from tuimoney.tui.screens.base import Screen
from tuimoney.tui.widgets import TextField, cycle

MAX_DROPDOWN_ROWS = 4
FORM_HEIGHT = 12
FORM_WIDTH = 50


class LoginFocus(Enum):
    USER = auto()
    PASSWORD = auto()
    LOGIN_BUTTON = auto()
    CREATE_USER_BUTTON = auto()


FOCUS_ORDER = tuple(LoginFocus)


class LoginScreen(Screen):
    screen_id = ScreenId.LOGIN

    def __init__(self, users: list[str] | None = None) -> None:
        self.users = users or ["default"]
        self.focus = LoginFocus.USER
        self.user_selected = 0
        self.dropdown_open = False
        self.password = TextField(max_length=64, masked=True)

    @property
    def selected_user(self) -> str:
        return self.users[self.user_selected]

    def _move_focus(self, step: int) -> None:
        # Focus stays on the dropdown while it is open.
        if self.dropdown_open:
            return
        self.focus = cycle(FOCUS_ORDER, self.focus, step)

    def _activate(self) -> ScreenResult:
        if self.focus is LoginFocus.USER:
            self.dropdown_open = not self.dropdown_open
            return ScreenResult.none()
        if self.focus is LoginFocus.CREATE_USER_BUTTON:
            return ScreenResult.go_to(ScreenId.CREATE_USER)
        # Login button, or Enter in the password field.
        self.password.clear()
        return ScreenResult.go_to(ScreenId.DASHBOARD)

    def handle_action(self, action: Action, repo: EntryRepository) -> ScreenResult:
        kind = action.kind
        if kind is ActionKind.CANCEL:
            self.dropdown_open = False
        elif kind is ActionKind.FOCUS_NEXT:
            self._move_focus(1)
        elif kind is ActionKind.FOCUS_PREV:
            self._move_focus(-1)
        elif kind is ActionKind.NAV_UP:
            if self.dropdown_open and self.user_selected > 0:
                self.user_selected -= 1
        elif kind is ActionKind.NAV_DOWN:
            if self.dropdown_open and self.user_selected + 1 < len(self.users):
                self.user_selected += 1
        elif kind is ActionKind.ACTIVATE:
            return self._activate()
        elif kind is ActionKind.INPUT_CHAR:
            if self.focus is LoginFocus.PASSWORD:
                self.password.insert(action.char)
        elif kind is ActionKind.BACKSPACE:
            if self.focus is LoginFocus.PASSWORD:
                self.password.backspace()
        return ScreenResult.none()

    def visible_users(self) -> tuple[int, list[str]]:
        """First index and names shown in the dropdown, scrolled to keep the selection visible."""
        first = max(0, self.user_selected - MAX_DROPDOWN_ROWS + 1)
        return first, self.users[first : first + MAX_DROPDOWN_ROWS]

    def render(self, win: Any, palette: Palette) -> None:
        top, left = centered_origin(win, FORM_HEIGHT, FORM_WIDTH)
        draw_box(win, top, left, FORM_HEIGHT, FORM_WIDTH, "Login", palette.title)

        x = left + 2
        arrow = "^" if self.dropdown_open else "v"
        put_segments(
            win,
            top + 2,
            x,
            field("Username:", f"{self.selected_user} {arrow}", 30, self.focus is LoginFocus.USER, palette),
        )
        put_segments(
            win,
            top + 4,
            x,
            field("Password:", self.password.display(), 30, self.focus is LoginFocus.PASSWORD, palette),
        )
        # Buttons sit below the rows a fully open dropdown can cover.
        put_segments(
            win,
            top + 4 + MAX_DROPDOWN_ROWS + 2,
            x + 8,
            [
                button("Login", self.focus is LoginFocus.LOGIN_BUTTON, palette),
                ("   ", 0),
                button("Create User", self.focus is LoginFocus.CREATE_USER_BUTTON, palette),
            ],
        )

        if self.dropdown_open:
            first, visible = self.visible_users()
            drop_top = top + 3
            drop_left = x + 11
            draw_box(win, drop_top, drop_left, len(visible) + 2, 32)
            for offset, name in enumerate(visible):
                attr = palette.selected if first + offset == self.user_selected else 0
                put(win, drop_top + 1 + offset, drop_left + 1, f" {name}".ljust(30), attr)
