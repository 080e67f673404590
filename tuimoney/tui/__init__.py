"""Interactive curses shell."""

import curses
from typing import Any

from tuimoney.tui.actions import action_for_key
from tuimoney.tui.app import App
from tuimoney.tui.layout import Palette


def _loop(stdscr: Any, app: App) -> None:
    # Raw mode delivers Ctrl+C and Ctrl+Q as keys instead of signals.
    curses.raw()
    try:
        curses.set_escdelay(25)
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    palette = Palette.from_terminal()

    while True:
        stdscr.erase()
        app.render(stdscr, palette)
        stdscr.refresh()
        try:
            key = stdscr.get_wch()
        except curses.error:
            continue
        if app.apply(action_for_key(key)):
            break


def run(app: App) -> None:
    """Run the shell until the user quits; the terminal is restored on any exit."""
    curses.wrapper(_loop, app)


__all__ = ["App", "run"]
