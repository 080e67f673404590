"""Shell screens."""

from tuimoney.tui.screens.base import Screen
from tuimoney.tui.screens.create_user import CreateUserScreen
from tuimoney.tui.screens.dashboard import DashboardScreen
from tuimoney.tui.screens.login import LoginScreen

__all__ = ["CreateUserScreen", "DashboardScreen", "LoginScreen", "Screen"]
