"""Small editable building blocks shared by the screens."""

from typing import Sequence, TypeVar

T = TypeVar("T")


class TextField:
    """Single-line text input."""

    def __init__(self, value: str = "", max_length: int = 64, masked: bool = False) -> None:
        self.value = value[:max_length]
        self.max_length = max_length
        self.masked = masked

    def insert(self, char: str) -> None:
        if len(self.value) < self.max_length:
            self.value += char

    def backspace(self) -> None:
        self.value = self.value[:-1]

    def clear(self) -> None:
        self.value = ""

    def display(self, width: int | None = None) -> str:
        text = "*" * len(self.value) if self.masked else self.value
        if width is not None and len(text) > width:
            # Keep the end visible while typing.
            text = text[-width:]
        return text


def cycle(options: Sequence[T], current: T, step: int) -> T:
    """Move ``step`` places through ``options``, wrapping at both ends."""
    index = options.index(current)
    return options[(index + step) % len(options)]
