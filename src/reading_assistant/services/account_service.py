"""Account Service - authentication, profile and keyword-history operations."""

import logging
from typing import List, Optional

from reading_assistant.core import AccountResult, AuthExpiredError, User, ValidationError
from reading_assistant.io import ApiClient
from reading_assistant.services.validation import (
    validate_credentials,
    validate_email,
    validate_password_change,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Translates account actions into backend calls.

    Login, signup, logout and profile updates surface the backend's own
    message when it rejects a request (wrong password, taken username...).
    Everything except ``change_password`` is safe to retry.
    """

    LOGIN_PATH = "/login/"
    SIGNUP_PATH = "/signup/"
    LOGOUT_PATH = "/logout/"
    PROFILE_PATH = "/profile/"
    CLEAR_HISTORY_PATH = "/clear_user_keyword_history/"

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def login(self, username: str, password: str) -> AccountResult:
        validate_credentials(username, password)
        body = self._api.post(
            self.LOGIN_PATH,
            {"username": username.strip(), "password": password},
            auth_required=False,
            accept_error_body=True,
        )
        return AccountResult.from_payload(body, "Login failed")

    def signup(self, username: str, email: str, password: str, bio: Optional[str] = None) -> AccountResult:
        validate_credentials(username, password)
        payload = {
            "username": username.strip(),
            "email": validate_email(email),
            "password": password,
        }
        if bio:
            payload["bio"] = bio
        body = self._api.post(self.SIGNUP_PATH, payload, auth_required=False, accept_error_body=True)
        return AccountResult.from_payload(body, "Signup failed")

    def end_session(self) -> ApiClient:
        """Detach the signed-in session locally; pass the result to ``logout``.

        Called on the UI thread so a login started right after never shares
        cookies with the logout request still in flight.
        """
        return self._api.detach()

    def logout(self, ended_session: ApiClient) -> AccountResult:
        """Tell the backend to end a session previously returned by ``end_session``."""
        try:
            body = ended_session.post(self.LOGOUT_PATH, auth_required=False, accept_error_body=True)
        finally:
            ended_session.close()
        return AccountResult.from_payload(body, "Logged out")

    def fetch_current_user(self) -> Optional[User]:
        """Return the signed-in user, or None when there is no valid session."""
        try:
            body = self._api.get(self.PROFILE_PATH)
        except AuthExpiredError:
            return None
        result = AccountResult.from_payload(body)
        return result.user if result.success else None

    def update_profile(self, email: str, bio: Optional[str], known_keywords: List[str]) -> AccountResult:
        payload = {
            "email": validate_email(email),
            "bio": bio or "",
            "known_keywords": list(known_keywords),
        }
        body = self._api.put(self.PROFILE_PATH, payload, accept_error_body=True)
        return AccountResult.from_payload(body, "Failed to update profile")

    def change_password(self, current_password: str, new_password: str, confirm_password: str) -> AccountResult:
        """Change the password after client-side validation.

        Must not be retried automatically: if the change was applied but the
        response was lost, the old password no longer works.
        """
        validate_password_change(current_password, new_password, confirm_password)
        body = self._api.put(
            self.PROFILE_PATH,
            {"current_password": current_password, "new_password": new_password},
            accept_error_body=True,
        )
        return AccountResult.from_payload(body, "Failed to change password")

    def clear_keyword_history(self, keywords: Optional[List[str]] = None) -> AccountResult:
        """Clear the given keywords from history, or all of it when None."""
        if keywords is None:
            payload = {"clear_all": True}
        else:
            if not keywords:
                raise ValidationError("Select at least one keyword to clear")
            payload = {"keywords": list(keywords)}
        body = self._api.post(self.CLEAR_HISTORY_PATH, payload, accept_error_body=True)
        return AccountResult.from_payload(body, "Failed to clear keyword history")
