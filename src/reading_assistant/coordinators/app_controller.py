"""App Controller - Routes between pages and gates them behind authentication."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Slot

from reading_assistant.core import AUTH_EXPIRED_MESSAGE, User
from reading_assistant.ui import MainWindow

from .history_coordinator import HistoryCoordinator
from .passage_interaction_coordinator import PassageInteractionCoordinator
from .profile_coordinator import ProfileCoordinator
from .session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)


class AppController(QObject):
    """
    Central Nervous System of the application.
    Owns the current route and switches pages as the session changes.
    """

    ROUTES = ("home", "history", "profile")
    AUTH_SCREEN = "auth"

    def __init__(
        self,
        main_window: MainWindow,
        session: SessionCoordinator,
        interaction: PassageInteractionCoordinator,
        history: HistoryCoordinator,
        profile: ProfileCoordinator,
    ):
        super().__init__()

        self.main_window = main_window
        self.session = session
        self.interaction = interaction
        self.history = history
        self.profile = profile

        # Routing state
        self.current_route = "home"
        self.showing_auth = True
        self.reauth_pending = False
        self._last_username: Optional[str] = None

        self.session.user_changed.connect(self.handle_user_changed)
        self.session.signed_in.connect(self.handle_signed_in)
        self.session.reauthentication_required.connect(self.handle_reauthentication_required)
        self.main_window.navigate_requested.connect(self.navigate)
        self.main_window.logout_requested.connect(self.handle_logout)
        self.history.back_requested.connect(self._go_home)
        self.profile.back_requested.connect(self._go_home)

    def start(self):
        """Show the auth screen and try to resume an existing session."""
        self._show_auth()
        self.session.restore_session()

    @Slot(str)
    def navigate(self, route: str):
        if route not in self.ROUTES:
            raise ValueError(f"Unknown route: {route}")

        self.current_route = route
        # An expired session keeps its user until the next sign-in
        if not self.session.is_authenticated or self.reauth_pending:
            self._show_auth()
            return

        self.showing_auth = False
        self.main_window.display_screen(route)
        if route == "history":
            self.history.show()
        elif route == "profile":
            self.profile.show()

    def handle_user_changed(self, user: Optional[User]):
        self.main_window.set_signed_in_user(user.username if user is not None else None)

        if user is None:
            self.reauth_pending = False
            self._show_auth()

    def handle_signed_in(self, user: User):
        """Leave the auth screen for the remembered route."""
        # A different account must not see the previous passage
        if self._last_username is not None and self._last_username != user.username:
            self.interaction.reset()
        self._last_username = user.username
        self.reauth_pending = False
        self.profile.reset_password_guard()
        self.navigate(self.current_route)

    @Slot()
    def handle_reauthentication_required(self):
        """Ask for credentials again while keeping passage and route intact."""
        if self.reauth_pending or not self.session.is_authenticated:
            return
        self.reauth_pending = True
        self.main_window.show_info("Session Expired", AUTH_EXPIRED_MESSAGE)
        self._show_auth()

    @Slot()
    def handle_logout(self):
        self.interaction.reset()
        self.current_route = "home"
        self._last_username = None
        self.session.logout()

    def _go_home(self):
        self.navigate("home")

    def _show_auth(self):
        self.showing_auth = True
        self.main_window.display_screen(self.AUTH_SCREEN)
