"""Drawing helpers for curses windows."""

import curses
from dataclasses import dataclass
from typing import Any, Iterable

Segment = tuple[str, int]


@dataclass(frozen=True)
class Palette:
    """Text attributes used by the screens."""

    title: int
    label: int
    focus: int
    selected: int
    dim: int
    error: int
    status: int
    expense: int
    income: int

    @classmethod
    def plain(cls) -> "Palette":
        """Attributes that need no colour support."""
        return cls(
            title=curses.A_BOLD,
            label=curses.A_BOLD,
            focus=curses.A_REVERSE,
            selected=curses.A_REVERSE,
            dim=curses.A_DIM,
            error=curses.A_BOLD,
            status=curses.A_NORMAL,
            expense=curses.A_NORMAL,
            income=curses.A_NORMAL,
        )

    @classmethod
    def from_terminal(cls) -> "Palette":
        """Colour palette; call after curses has been initialised."""
        if not curses.has_colors():
            return cls.plain()

        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK

        curses.init_pair(1, curses.COLOR_RED, background)
        curses.init_pair(2, curses.COLOR_GREEN, background)
        curses.init_pair(3, curses.COLOR_CYAN, background)
        curses.init_pair(4, curses.COLOR_YELLOW, background)

        return cls(
            title=curses.color_pair(3) | curses.A_BOLD,
            label=curses.A_BOLD,
            focus=curses.color_pair(4) | curses.A_REVERSE | curses.A_BOLD,
            selected=curses.A_REVERSE,
            dim=curses.A_DIM,
            error=curses.color_pair(1) | curses.A_BOLD,
            status=curses.color_pair(2),
            expense=curses.color_pair(1),
            income=curses.color_pair(2),
        )


def put(win: Any, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> int:
    """Write ``text`` clipped to the window; returns the column after it."""
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x >= width:
        return x
    room = width - x
    try:
        win.addnstr(y, x, text, room, attr)
    except curses.error:
        # Writing the bottom-right cell moves the cursor off-window.
        pass
    return x + min(len(text), room)


def put_segments(win: Any, y: int, x: int, segments: Iterable[Segment]) -> int:
    for text, attr in segments:
        x = put(win, y, x, text, attr)
    return x


def centered_origin(win: Any, height: int, width: int) -> tuple[int, int]:
    """Top-left corner of a ``height`` x ``width`` box centred in ``win``."""
    win_h, win_w = win.getmaxyx()
    return max(0, (win_h - height) // 2), max(0, (win_w - width) // 2)


def draw_box(win: Any, y: int, x: int, height: int, width: int, title: str = "", attr: int = curses.A_NORMAL) -> None:
    """Draw an ASCII frame, optionally titled."""
    horizontal = "+" + "-" * (width - 2) + "+"
    put(win, y, x, horizontal, attr)
    for row in range(y + 1, y + height - 1):
        put(win, row, x, "|", attr)
        put(win, row, x + width - 1, "|", attr)
    put(win, y + height - 1, x, horizontal, attr)
    if title:
        put(win, y, x + 2, f" {title} ", attr)


def field(label: str, value: str, width: int, focused: bool, palette: Palette) -> list[Segment]:
    """Segments for ``label [value___]`` with the value padded to ``width``."""
    shown = value[-width:] if len(value) > width else value
    cursor = "_" if focused and len(shown) < width else ""
    body = (shown + cursor).ljust(width)
    return [
        (f"{label} ", palette.focus if focused else palette.label),
        ("[", curses.A_NORMAL),
        (body, palette.focus if focused else curses.A_NORMAL),
        ("]", curses.A_NORMAL),
    ]


def button(label: str, focused: bool, palette: Palette) -> Segment:
    return (f"[ {label} ]", palette.focus if focused else curses.A_NORMAL)
