"""Session Coordinator - single owner of the signed-in user."""

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, Slot

from reading_assistant.core import AccountResult, User, describe_error
from reading_assistant.services import AccountService, TaskRunner

logger = logging.getLogger(__name__)

ResultHandler = Callable[[AccountResult], None]


class SessionCoordinator(QObject):
    """
    Holds the current User and runs the account actions that change it.

    Responsibilities:
    - Restore an existing backend session at start-up
    - Login / signup / logout
    - Replace the user after profile edits
    - Prompt for re-authentication without discarding state
    """

    user_changed = Signal(object)  # Optional[User]
    signed_in = Signal(object)  # User, after login, signup or restore
    restoring_changed = Signal(bool)
    reauthentication_required = Signal()

    def __init__(self, account_service: AccountService, task_runner: TaskRunner):
        super().__init__()

        self.account_service = account_service
        self.task_runner = task_runner

        self.user: Optional[User] = None
        self.restoring = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def restore_session(self):
        """Load the user behind an existing session cookie, if any."""
        self._set_restoring(True)
        self.task_runner.submit(
            self.account_service.fetch_current_user,
            on_result=self._handle_restored,
            on_error=self._handle_restore_error,
        )

    def login(self, username: str, password: str, on_finished: ResultHandler):
        self.task_runner.submit(
            lambda: self.account_service.login(username, password),
            on_result=lambda result: self._handle_auth_result(result, on_finished),
            on_error=lambda error: on_finished(AccountResult(False, describe_error(error, "Login failed"))),
        )

    def signup(self, username: str, email: str, password: str, bio: Optional[str], on_finished: ResultHandler):
        self.task_runner.submit(
            lambda: self.account_service.signup(username, email, password, bio),
            on_result=lambda result: self._handle_auth_result(result, on_finished),
            on_error=lambda error: on_finished(AccountResult(False, describe_error(error, "Signup failed"))),
        )

    @Slot()
    def logout(self):
        """End the session; local state is cleared even if the server call fails."""
        ended_session = self.account_service.end_session()
        self.task_runner.submit(
            lambda: self.account_service.logout(ended_session),
            on_result=lambda result: logger.info("Logged out: %s", result.message),
            on_error=lambda error: logger.warning("Logout request failed: %s", error),
        )
        self.apply_user(None)

    def refresh_user(self, on_finished: Optional[Callable[[bool], None]] = None):
        """Reload the user from the backend; keeps the current user on failure."""

        def handle(user: Optional[User]):
            if user is not None:
                self.apply_user(user)
            if on_finished is not None:
                on_finished(user is not None)

        def handle_error(error: BaseException):
            logger.warning("User refresh failed: %s", error)
            if on_finished is not None:
                on_finished(False)

        self.task_runner.submit(self.account_service.fetch_current_user, on_result=handle, on_error=handle_error)

    def apply_user(self, user: Optional[User]):
        self.user = user
        self.user_changed.emit(user)

    @Slot(str)
    def remember_known_keyword(self, word: str) -> bool:
        """Record a dismissed word locally; duplicates are ignored."""
        if self.user is None:
            return False
        added = self.user.add_known_keyword(word)
        if added:
            self.user_changed.emit(self.user)
        return added

    @Slot()
    def require_reauthentication(self):
        logger.info("Session expired; asking the user to sign in again")
        self.reauthentication_required.emit()

    def _handle_auth_result(self, result: AccountResult, on_finished: ResultHandler):
        if result.success and result.user is not None:
            self.apply_user(result.user)
            self.signed_in.emit(result.user)
            on_finished(result)
        else:
            on_finished(AccountResult(False, result.message))

    def _handle_restored(self, user: Optional[User]):
        self._set_restoring(False)
        self.apply_user(user)
        if user is not None:
            self.signed_in.emit(user)

    def _handle_restore_error(self, error: BaseException):
        logger.warning("Auth check failed: %s", error)
        self._set_restoring(False)
        self.apply_user(None)

    def _set_restoring(self, restoring: bool):
        self.restoring = restoring
        self.restoring_changed.emit(restoring)
