"""UI layer - PySide6 presentation components."""

from .auth_screen import AuthScreen
from .history_screen import HistoryScreen
from .home_screen import HomeScreen
from .main_window import MainWindow
from .passage_view import PassageView
from .profile_screen import ProfileScreen

__all__ = ["MainWindow", "PassageView", "HomeScreen", "HistoryScreen", "ProfileScreen", "AuthScreen"]
