"""Create-user screen.

Schematic only: the form collects a login and password but stores nothing.
"""

from enum import Enum, auto
from typing import Any

from tuimoney.domain.repository import EntryRepository
from tuimoney.tui.actions import Action, ActionKind
from tuimoney.tui.layout import Palette, button, centered_origin, draw_box, field, put_segments
from tuimoney.tui.navigation import ScreenId, ScreenResult
from tuimoney.tui.screens.base import Screen
from tuimoney.tui.widgets import TextField, cycle

FORM_HEIGHT = 11
FORM_WIDTH = 58


class CreateUserFocus(Enum):
    LOGIN = auto()
    PASSWORD = auto()
    REPEAT_PASSWORD = auto()
    CREATE_BUTTON = auto()
    BACK_BUTTON = auto()


FOCUS_ORDER = tuple(CreateUserFocus)


class CreateUserScreen(Screen):
    screen_id = ScreenId.CREATE_USER

    def __init__(self) -> None:
        self.focus = CreateUserFocus.LOGIN
        self.fields = {
            CreateUserFocus.LOGIN: TextField(max_length=32),
            CreateUserFocus.PASSWORD: TextField(max_length=64, masked=True),
            CreateUserFocus.REPEAT_PASSWORD: TextField(max_length=64, masked=True),
        }

    def _reset(self) -> None:
        for text_field in self.fields.values():
            text_field.clear()
        self.focus = CreateUserFocus.LOGIN

    def handle_action(self, action: Action, repo: EntryRepository) -> ScreenResult:
        kind = action.kind
        if kind in (ActionKind.FOCUS_NEXT, ActionKind.NAV_DOWN, ActionKind.NAV_RIGHT):
            self.focus = cycle(FOCUS_ORDER, self.focus, 1)
        elif kind in (ActionKind.FOCUS_PREV, ActionKind.NAV_UP, ActionKind.NAV_LEFT):
            self.focus = cycle(FOCUS_ORDER, self.focus, -1)
        elif kind is ActionKind.CANCEL:
            self._reset()
            return ScreenResult.go_to(ScreenId.LOGIN)
        elif kind is ActionKind.ACTIVATE:
            if self.focus in (CreateUserFocus.CREATE_BUTTON, CreateUserFocus.BACK_BUTTON):
                self._reset()
                return ScreenResult.go_to(ScreenId.LOGIN)
        elif kind is ActionKind.INPUT_CHAR:
            if self.focus in self.fields:
                self.fields[self.focus].insert(action.char)
        elif kind is ActionKind.BACKSPACE:
            if self.focus in self.fields:
                self.fields[self.focus].backspace()
        return ScreenResult.none()

    def render(self, win: Any, palette: Palette) -> None:
        top, left = centered_origin(win, FORM_HEIGHT, FORM_WIDTH)
        draw_box(win, top, left, FORM_HEIGHT, FORM_WIDTH, "Create New User", palette.title)

        rows = (
            ("Login     ", CreateUserFocus.LOGIN),
            ("Password  ", CreateUserFocus.PASSWORD),
            ("Repeat    ", CreateUserFocus.REPEAT_PASSWORD),
        )
        for offset, (label, focus) in enumerate(rows):
            put_segments(
                win,
                top + 2 + offset * 2,
                left + 2,
                field(label, self.fields[focus].display(), 40, self.focus is focus, palette),
            )

        put_segments(
            win,
            top + 8,
            left + 2,
            [
                button("Create", self.focus is CreateUserFocus.CREATE_BUTTON, palette),
                ("  ", 0),
                button("Back", self.focus is CreateUserFocus.BACK_BUTTON, palette),
            ],
        )
