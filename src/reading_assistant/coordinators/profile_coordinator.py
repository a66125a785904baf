"""Profile Coordinator - profile form, password change and keyword history."""

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from reading_assistant.core import (
    AccountResult,
    AuthExpiredError,
    ReadingAssistantError,
    TransportError,
    User,
    ValidationError,
    describe_error,
)
from reading_assistant.services import AccountService, TaskRunner
from reading_assistant.services.validation import (
    add_known_keyword,
    remove_known_keyword,
    validate_email,
    validate_password_change,
)
from reading_assistant.ui import ProfileScreen

from .session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)


class ProfileCoordinator(QObject):
    """
    Page controller for the profile screen.

    Form state (email, bio, known keywords) is edited locally and only sent
    on submit. Every check that can fail without the backend runs first.
    """

    back_requested = Signal()

    PROFILE_FAILED_MESSAGE = "An error occurred while updating profile"
    PASSWORD_FAILED_MESSAGE = "An error occurred while changing password"
    PASSWORD_UNCONFIRMED_MESSAGE = (
        "The password change could not be confirmed. "
        "Sign in again to check which password is active before trying again."
    )
    CLEAR_HISTORY_FAILED_MESSAGE = "Failed to clear keyword history"

    def __init__(
        self,
        profile_screen: ProfileScreen,
        account_service: AccountService,
        session: SessionCoordinator,
        task_runner: TaskRunner,
    ):
        super().__init__()

        self.profile_screen = profile_screen
        self.account_service = account_service
        self.session = session
        self.task_runner = task_runner

        self.email = ""
        self.bio = ""
        self.known_keywords: List[str] = []
        self.submitting = False
        self.alert: Optional[tuple] = None  # (kind, message)
        # Set after an unacknowledged password change; cleared when the user signs in again
        self.password_change_blocked = False

        self.profile_screen.keyword_add_requested.connect(self.add_keyword)
        self.profile_screen.keyword_remove_requested.connect(self.remove_keyword)
        self.profile_screen.profile_submitted.connect(self.submit_profile)
        self.profile_screen.password_change_requested.connect(self.change_password)
        self.profile_screen.clear_history_requested.connect(self.clear_keyword_history)
        self.profile_screen.clear_all_history_requested.connect(self.clear_all_keyword_history)
        self.profile_screen.back_requested.connect(self._on_back_requested)

    def show(self):
        """Populate the form from the session user and refresh it in the background."""
        self.clear_alert()
        self.load_user(self.session.user)
        self.session.refresh_user(on_finished=self._handle_refreshed)

    def load_user(self, user: Optional[User]):
        if user is None:
            return
        self.email = user.email or ""
        self.bio = user.bio or ""
        self.known_keywords = list(user.known_keywords)
        self.profile_screen.display_profile(user.username, self.email, self.bio)
        self.profile_screen.display_known_keywords(self.known_keywords)
        self.profile_screen.display_keyword_history(user.all_keyword_explanation_pairs)

    @Slot(str)
    def add_keyword(self, keyword: str) -> bool:
        try:
            self.known_keywords = add_known_keyword(self.known_keywords, keyword)
        except ValidationError:
            return False
        except ReadingAssistantError as e:
            self._show_alert("error", str(e))
            return False
        self.profile_screen.display_known_keywords(self.known_keywords)
        self.profile_screen.clear_keyword_input()
        return True

    @Slot(str)
    def remove_keyword(self, keyword: str) -> bool:
        try:
            self.known_keywords = remove_known_keyword(self.known_keywords, keyword)
        except ReadingAssistantError as e:
            logger.debug("Keyword removal ignored: %s", e)
            return False
        self.profile_screen.display_known_keywords(self.known_keywords)
        return True

    @Slot(str, str)
    def submit_profile(self, email: str, bio: str):
        if self.submitting:
            return
        self.clear_alert()
        try:
            email = validate_email(email)
        except ValidationError as e:
            self._show_alert("error", str(e))
            return

        self.email, self.bio = email, bio
        keywords = list(self.known_keywords)
        self._set_submitting(True)
        self.task_runner.submit(
            lambda: self.account_service.update_profile(email, bio, keywords),
            on_result=self._handle_profile_result,
            on_error=lambda error: self._handle_error(error, self.PROFILE_FAILED_MESSAGE),
        )

    @Slot(str, str, str)
    def change_password(self, current_password: str, new_password: str, confirm_password: str):
        if self.submitting:
            return
        self.clear_alert()
        if self.password_change_blocked:
            self._show_password_error(self.PASSWORD_UNCONFIRMED_MESSAGE)
            return
        try:
            validate_password_change(current_password, new_password, confirm_password)
        except ValidationError as e:
            self._show_password_error(str(e))
            return

        self._set_submitting(True)
        self.task_runner.submit(
            lambda: self.account_service.change_password(current_password, new_password, confirm_password),
            on_result=self._handle_password_result,
            on_error=self._handle_password_error,
        )

    @Slot(list)
    def clear_keyword_history(self, keywords: List[str]):
        if not keywords:
            self._show_alert("error", "Select at least one keyword to clear")
            return
        self._clear_history(list(keywords))

    @Slot()
    def clear_all_keyword_history(self):
        self._clear_history(None)

    def _clear_history(self, keywords: Optional[List[str]]):
        if self.submitting:
            return
        self.clear_alert()
        self._set_submitting(True)
        self.task_runner.submit(
            lambda: self.account_service.clear_keyword_history(keywords),
            on_result=self._handle_clear_history_result,
            on_error=lambda error: self._handle_error(error, self.CLEAR_HISTORY_FAILED_MESSAGE),
        )

    def _handle_profile_result(self, result: AccountResult):
        self._set_submitting(False)
        if result.success:
            if result.user is not None:
                self.session.apply_user(result.user)
                self.load_user(result.user)
            self._show_alert("success", result.message or "Profile updated successfully!")
        else:
            self._show_alert("error", result.message or "Failed to update profile")

    def _handle_password_result(self, result: AccountResult):
        self._set_submitting(False)
        if result.success:
            if result.user is not None:
                self.session.apply_user(result.user)
            self.profile_screen.close_password_dialog()
            self._show_alert("success", "Password changed successfully!")
        else:
            self._show_password_error(result.message or "Failed to change password")

    def _handle_password_error(self, error: BaseException):
        self._set_submitting(False)
        logger.warning("Password change failed: %s", error)
        if isinstance(error, TransportError):
            # The change may have been applied server-side; never resend blindly
            self.password_change_blocked = True
            self.profile_screen.set_password_change_enabled(False)
            self._show_password_error(self.PASSWORD_UNCONFIRMED_MESSAGE)
            return
        self._show_password_error(describe_error(error, self.PASSWORD_FAILED_MESSAGE))
        if isinstance(error, AuthExpiredError):
            self.session.require_reauthentication()

    def _handle_clear_history_result(self, result: AccountResult):
        self._set_submitting(False)
        if result.success:
            self._show_alert("success", result.message or "Keyword history cleared")
            self.session.refresh_user(on_finished=self._handle_refreshed)
        else:
            self._show_alert("error", result.message or self.CLEAR_HISTORY_FAILED_MESSAGE)

    def _handle_error(self, error: BaseException, fallback: str):
        self._set_submitting(False)
        logger.warning("%s: %s", fallback, error)
        self._show_alert("error", describe_error(error, fallback))
        if isinstance(error, AuthExpiredError):
            self.session.require_reauthentication()

    def _handle_refreshed(self, success: bool):
        if success:
            self.load_user(self.session.user)

    def reset_password_guard(self):
        """Allow password changes again once the user has signed in afresh."""
        self.password_change_blocked = False
        self.profile_screen.set_password_change_enabled(True)

    def _show_password_error(self, message: str):
        self.alert = ("error", message)
        self.profile_screen.show_password_error(message)

    def _show_alert(self, kind: str, message: str):
        self.alert = (kind, message)
        self.profile_screen.show_alert(kind, message)

    def clear_alert(self):
        self.alert = None
        self.profile_screen.clear_alert()

    def _set_submitting(self, submitting: bool):
        self.submitting = submitting
        self.profile_screen.set_submitting(submitting)

    def _on_back_requested(self):
        self.back_requested.emit()
