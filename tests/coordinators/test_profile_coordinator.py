"""Unit tests for ProfileCoordinator."""

from unittest.mock import MagicMock

import pytest

from reading_assistant.coordinators import ProfileCoordinator
from reading_assistant.core import AccountResult, AuthExpiredError, TransportError, User


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_profile_screen():
    return MagicMock()


@pytest.fixture
def mock_account_service():
    return MagicMock()


@pytest.fixture
def mock_session(sample_user):
    session = MagicMock()
    session.user = sample_user
    return session


@pytest.fixture
def coordinator(mock_profile_screen, mock_account_service, mock_session, deferred_runner):
    coordinator = ProfileCoordinator(
        profile_screen=mock_profile_screen,
        account_service=mock_account_service,
        session=mock_session,
        task_runner=deferred_runner,
    )
    coordinator.load_user(mock_session.user)
    return coordinator


# ============================================================================
# Loading
# ============================================================================


def test_show_populates_form_and_refreshes(coordinator, mock_profile_screen, mock_session):
    coordinator.show()

    mock_profile_screen.display_profile.assert_called_with("ada", "ada@example.com", "Engineer")
    mock_profile_screen.display_known_keywords.assert_called_with(["api", "cache"])
    mock_session.refresh_user.assert_called_once()


def test_refreshed_user_is_reloaded(coordinator, mock_session):
    mock_session.user = User(id=7, username="ada", email="new@example.com", known_keywords=["api"])

    coordinator._handle_refreshed(True)

    assert coordinator.email == "new@example.com"
    assert coordinator.known_keywords == ["api"]


# ============================================================================
# Known keywords
# ============================================================================


class TestKnownKeywords:
    def test_add_normalized_keyword(self, coordinator, mock_profile_screen):
        assert coordinator.add_keyword("  Latency ") is True

        assert coordinator.known_keywords == ["api", "cache", "latency"]
        mock_profile_screen.clear_keyword_input.assert_called_once()

    def test_duplicate_differing_by_case(self, coordinator, mock_profile_screen):
        assert coordinator.add_keyword("API") is False

        assert coordinator.known_keywords == ["api", "cache"]
        assert coordinator.alert == ("error", "Keyword already exists")
        mock_profile_screen.show_alert.assert_called_with("error", "Keyword already exists")

    def test_blank_keyword_is_ignored(self, coordinator, mock_profile_screen):
        assert coordinator.add_keyword("   ") is False
        mock_profile_screen.show_alert.assert_not_called()

    def test_remove_keyword(self, coordinator):
        assert coordinator.remove_keyword("cache") is True
        assert coordinator.known_keywords == ["api"]

    def test_local_edits_make_no_network_call(self, coordinator, deferred_runner):
        coordinator.add_keyword("latency")
        coordinator.remove_keyword("api")

        assert deferred_runner.pending == []


# ============================================================================
# Profile submission
# ============================================================================


class TestSubmitProfile:
    def test_invalid_email_is_rejected_locally(self, coordinator, deferred_runner):
        coordinator.submit_profile("not-an-email", "bio")

        assert coordinator.alert == ("error", "Please enter a valid email address")
        assert deferred_runner.pending == []

    def test_success_updates_session(self, coordinator, mock_account_service, mock_session, deferred_runner):
        updated = User(id=7, username="ada", email="ada@new.example.com", known_keywords=["api", "cache", "latency"])
        mock_account_service.update_profile.return_value = AccountResult(True, "", updated)
        coordinator.add_keyword("latency")

        coordinator.submit_profile("ada@new.example.com", "Engineer")
        assert coordinator.submitting is True
        deferred_runner.run()

        mock_account_service.update_profile.assert_called_once_with(
            "ada@new.example.com", "Engineer", ["api", "cache", "latency"]
        )
        mock_session.apply_user.assert_called_once_with(updated)
        assert coordinator.alert == ("success", "Profile updated successfully!")
        assert coordinator.submitting is False

    def test_backend_rejection(self, coordinator, mock_account_service, deferred_runner):
        mock_account_service.update_profile.return_value = AccountResult(False, "Email already in use")

        coordinator.submit_profile("ada@example.com", "")
        deferred_runner.run()

        assert coordinator.alert == ("error", "Email already in use")

    def test_auth_expiry(self, coordinator, mock_account_service, mock_session, deferred_runner):
        mock_account_service.update_profile.side_effect = AuthExpiredError()

        coordinator.submit_profile("ada@example.com", "")
        deferred_runner.run()

        assert coordinator.alert == ("error", "Please log in again to continue.")
        mock_session.require_reauthentication.assert_called_once()


# ============================================================================
# Password change
# ============================================================================


class TestChangePassword:
    def test_short_password_makes_no_call(self, coordinator, mock_profile_screen, deferred_runner):
        coordinator.change_password("old-secret", "abc", "abc")

        mock_profile_screen.show_password_error.assert_called_with("New password must be at least 6 characters long")
        assert deferred_runner.pending == []

    def test_mismatch_makes_no_call(self, coordinator, mock_profile_screen, deferred_runner):
        coordinator.change_password("old-secret", "new-secret", "other-secret")

        mock_profile_screen.show_password_error.assert_called_with("New passwords do not match")
        assert deferred_runner.pending == []

    def test_success(self, coordinator, mock_account_service, mock_profile_screen, deferred_runner):
        mock_account_service.change_password.return_value = AccountResult(True, "Password updated")

        coordinator.change_password("old-secret", "new-secret", "new-secret")
        deferred_runner.run()

        mock_profile_screen.close_password_dialog.assert_called_once()
        assert coordinator.alert == ("success", "Password changed successfully!")

    def test_wrong_current_password(self, coordinator, mock_account_service, mock_profile_screen, deferred_runner):
        mock_account_service.change_password.return_value = AccountResult(False, "Current password is incorrect")

        coordinator.change_password("wrong", "new-secret", "new-secret")
        deferred_runner.run()

        mock_profile_screen.show_password_error.assert_called_with("Current password is incorrect")
        assert coordinator.password_change_blocked is False

    def test_unconfirmed_change_blocks_resubmission(self, coordinator, mock_account_service, mock_profile_screen, deferred_runner):
        mock_account_service.change_password.side_effect = TransportError("timed out")

        coordinator.change_password("old-secret", "new-secret", "new-secret")
        deferred_runner.run()

        assert coordinator.password_change_blocked is True
        mock_profile_screen.set_password_change_enabled.assert_called_with(False)

        coordinator.change_password("old-secret", "new-secret", "new-secret")

        assert deferred_runner.pending == []
        assert mock_account_service.change_password.call_count == 1

    def test_guard_reset_after_sign_in(self, coordinator, mock_account_service, deferred_runner):
        mock_account_service.change_password.side_effect = TransportError("timed out")
        coordinator.change_password("old-secret", "new-secret", "new-secret")
        deferred_runner.run()

        coordinator.reset_password_guard()
        coordinator.change_password("new-secret", "newer-secret", "newer-secret")

        assert len(deferred_runner.pending) == 1


# ============================================================================
# Keyword history
# ============================================================================


class TestKeywordHistory:
    def test_clear_selected(self, coordinator, mock_account_service, mock_session, deferred_runner):
        mock_account_service.clear_keyword_history.return_value = AccountResult(True, "Cleared 1 keyword")

        coordinator.clear_keyword_history(["latency"])
        deferred_runner.run()

        mock_account_service.clear_keyword_history.assert_called_once_with(["latency"])
        assert coordinator.alert == ("success", "Cleared 1 keyword")
        mock_session.refresh_user.assert_called_once()

    def test_clear_nothing_selected(self, coordinator, deferred_runner):
        coordinator.clear_keyword_history([])

        assert coordinator.alert == ("error", "Select at least one keyword to clear")
        assert deferred_runner.pending == []

    def test_clear_all(self, coordinator, mock_account_service, deferred_runner):
        mock_account_service.clear_keyword_history.return_value = AccountResult(True, "")

        coordinator.clear_all_keyword_history()
        deferred_runner.run()

        mock_account_service.clear_keyword_history.assert_called_once_with(None)
        assert coordinator.alert == ("success", "Keyword history cleared")


def test_back_requested_is_forwarded(coordinator, mock_profile_screen):
    received = []
    coordinator.back_requested.connect(lambda: received.append(True))

    coordinator._on_back_requested()

    assert received == [True]
