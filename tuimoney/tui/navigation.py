"""Screen identifiers and the screen transition function."""

from dataclasses import dataclass
from enum import Enum


class ScreenId(Enum):
    LOGIN = "login"
    CREATE_USER = "create_user"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class ScreenResult:
    """What a screen asks the app to do after handling an action."""

    quit: bool = False
    go: ScreenId | None = None

    @classmethod
    def none(cls) -> "ScreenResult":
        return cls()

    @classmethod
    def exit(cls) -> "ScreenResult":
        return cls(quit=True)

    @classmethod
    def go_to(cls, target: ScreenId) -> "ScreenResult":
        return cls(go=target)


def transition(current: ScreenId, result: ScreenResult) -> tuple[ScreenId, bool]:
    """Apply a screen result to the active screen.

    Returns:
        Tuple of (next_screen, should_quit). Quitting keeps the current screen.
    """
    if result.quit:
        return current, True
    if result.go is not None:
        return result.go, False
    return current, False
