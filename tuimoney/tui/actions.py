"""Keyboard input mapped to shell actions."""

import curses
from dataclasses import dataclass
from enum import Enum, auto

from tuimoney.tui.navigation import ScreenId

CTRL_C = "\x03"
CTRL_Q = "\x11"
ESCAPE = "\x1b"


class ActionKind(Enum):
    NONE = auto()
    QUIT = auto()
    GO = auto()
    FOCUS_NEXT = auto()
    FOCUS_PREV = auto()
    ACTIVATE = auto()
    INPUT_CHAR = auto()
    BACKSPACE = auto()
    CANCEL = auto()
    NAV_UP = auto()
    NAV_DOWN = auto()
    NAV_LEFT = auto()
    NAV_RIGHT = auto()


@dataclass(frozen=True)
class Action:
    """One unit of user intent.

    ``char`` is set for INPUT_CHAR and ``target`` for GO.
    """

    kind: ActionKind
    char: str | None = None
    target: ScreenId | None = None

    @classmethod
    def input_char(cls, char: str) -> "Action":
        return cls(ActionKind.INPUT_CHAR, char=char)

    @classmethod
    def go(cls, target: ScreenId) -> "Action":
        return cls(ActionKind.GO, target=target)


_CHAR_KEYS = {
    CTRL_C: ActionKind.QUIT,
    CTRL_Q: ActionKind.QUIT,
    "\t": ActionKind.FOCUS_NEXT,
    "\n": ActionKind.ACTIVATE,
    "\r": ActionKind.ACTIVATE,
    ESCAPE: ActionKind.CANCEL,
    "\x7f": ActionKind.BACKSPACE,
    "\b": ActionKind.BACKSPACE,
}

_SPECIAL_KEYS = {
    curses.KEY_BTAB: ActionKind.FOCUS_PREV,
    curses.KEY_UP: ActionKind.NAV_UP,
    curses.KEY_DOWN: ActionKind.NAV_DOWN,
    curses.KEY_LEFT: ActionKind.NAV_LEFT,
    curses.KEY_RIGHT: ActionKind.NAV_RIGHT,
    curses.KEY_BACKSPACE: ActionKind.BACKSPACE,
    curses.KEY_ENTER: ActionKind.ACTIVATE,
}


def action_for_key(key: str | int) -> Action:
    """Map a key from ``window.get_wch()`` to an action.

    Args:
        key: A character, or a curses KEY_* code for special keys.

    Returns:
        The matching action; NONE for keys the shell does not use
        (including KEY_RESIZE, which only triggers a redraw).
    """
    if isinstance(key, str):
        if key in _CHAR_KEYS:
            return Action(_CHAR_KEYS[key])
        if key.isprintable():
            return Action.input_char(key)
        return Action(ActionKind.NONE)
    return Action(_SPECIAL_KEYS.get(key, ActionKind.NONE))
