"""Main Window - Application shell with menus and page stack."""

from typing import Dict, Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QMessageBox, QStackedWidget, QWidget


class MainWindow(QMainWindow):
    """Provides the application shell: navigation menu, page stack and dialogs."""

    # Signal emitted when user picks a page from the menu ("home", "history", "profile")
    navigate_requested = Signal(str)
    logout_requested = Signal()

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Reading Assistant")
        self.setGeometry(100, 100, 1100, 800)

        self._screens: Dict[str, QWidget] = {}
        self._setup_ui()
        self._create_menu_bar()

    def _setup_ui(self):
        """Initialize the main UI layout."""
        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)

    def _create_menu_bar(self):
        """Create the application menu bar."""
        menu_bar = self.menuBar()

        # Navigate menu
        self.navigate_menu = menu_bar.addMenu("&Navigate")
        for route, label, shortcut in (
            ("home", "&Home", "Ctrl+1"),
            ("history", "&Reading History", "Ctrl+2"),
            ("profile", "&Profile", "Ctrl+3"),
        ):
            action = QAction(label, self)
            action.setShortcut(shortcut)
            action.triggered.connect(lambda checked=False, r=route: self.navigate_requested.emit(r))
            self.navigate_menu.addAction(action)

        # Account menu
        self.account_menu = menu_bar.addMenu("&Account")
        self.logout_action = QAction("&Logout", self)
        self.logout_action.triggered.connect(self.logout_requested.emit)
        self.account_menu.addAction(self.logout_action)

        self.account_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        self.account_menu.addAction(exit_action)

    def add_screen(self, name: str, widget: QWidget):
        self._screens[name] = widget
        self.stack.addWidget(widget)

    def display_screen(self, name: str):
        widget = self._screens.get(name)
        if widget is None:
            raise ValueError(f"Unknown screen: {name}")
        self.stack.setCurrentWidget(widget)

    def set_signed_in_user(self, username: Optional[str]):
        """Reflect the session in the window title and menus."""
        signed_in = username is not None
        self.navigate_menu.setEnabled(signed_in)
        self.logout_action.setEnabled(signed_in)
        self.setWindowTitle(f"Reading Assistant - {username}" if signed_in else "Reading Assistant")

    def show_error(self, title: str, message: str):
        """Display an error message to the user."""
        QMessageBox.critical(self, title, message)

    def show_info(self, title: str, message: str):
        """Display an information message to the user."""
        QMessageBox.information(self, title, message)
