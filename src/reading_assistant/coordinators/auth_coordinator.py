"""Auth Coordinator - drives the login/signup form."""

from PySide6.QtCore import QObject, Slot

from reading_assistant.core import AccountResult
from reading_assistant.ui import AuthScreen

from .session_coordinator import SessionCoordinator


class AuthCoordinator(QObject):
    """Connects the auth form to the session, with a loading gate and error state."""

    def __init__(self, auth_screen: AuthScreen, session: SessionCoordinator):
        super().__init__()

        self.auth_screen = auth_screen
        self.session = session

        self.is_login = True
        self.loading = False
        self.error = ""

        self.auth_screen.login_requested.connect(self.handle_login)
        self.auth_screen.signup_requested.connect(self.handle_signup)
        self.auth_screen.mode_toggle_requested.connect(self.toggle_mode)

    @Slot(str, str)
    def handle_login(self, username: str, password: str):
        if not self._begin():
            return
        self.session.login(username, password, self._finish)

    @Slot(str, str, str, str)
    def handle_signup(self, username: str, email: str, password: str, bio: str):
        if not self._begin():
            return
        self.session.signup(username, email, password, bio or None, self._finish)

    @Slot()
    def toggle_mode(self):
        self.is_login = not self.is_login
        self.error = ""
        self.auth_screen.set_mode(self.is_login)
        self.auth_screen.clear_error()
        self.auth_screen.clear_form()

    def _begin(self) -> bool:
        if self.loading:
            return False
        self.loading = True
        self.error = ""
        self.auth_screen.clear_error()
        self.auth_screen.set_loading(True)
        return True

    def _finish(self, result: AccountResult):
        self.loading = False
        self.auth_screen.set_loading(False)
        if result.success:
            self.auth_screen.clear_form()
            return
        self.error = result.message or ("Login failed" if self.is_login else "Signup failed")
        self.auth_screen.show_error(self.error)
