"""Unit tests for HomeCoordinator."""

from unittest.mock import MagicMock

import pytest

from reading_assistant.coordinators import HomeCoordinator, PassageInteractionCoordinator
from reading_assistant.core import AUTH_EXPIRED_MESSAGE, AuthExpiredError, Passage, TransportError
from reading_assistant.io import TipStore
from reading_assistant.services import AnnotationRenderer


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_home_screen():
    """Mock HomeScreen for testing."""
    return MagicMock()


@pytest.fixture
def mock_passage_service():
    return MagicMock()


@pytest.fixture
def mock_session():
    return MagicMock()


@pytest.fixture
def tip_store(tmp_path):
    return TipStore(tmp_path)


@pytest.fixture
def interaction(mock_passage_service, deferred_runner):
    return PassageInteractionCoordinator(mock_passage_service, AnnotationRenderer(), deferred_runner)


@pytest.fixture
def coordinator(mock_home_screen, interaction, mock_passage_service, mock_session, tip_store, deferred_runner):
    return HomeCoordinator(
        home_screen=mock_home_screen,
        interaction=interaction,
        passage_service=mock_passage_service,
        session=mock_session,
        tip_store=tip_store,
        task_runner=deferred_runner,
    )


# ============================================================================
# Submission
# ============================================================================


class TestSubmit:
    def test_blank_passage_shows_error_without_request(self, coordinator, mock_home_screen, deferred_runner):
        coordinator.handle_submit("   ")

        assert coordinator.error == "Please enter a passage to analyze."
        mock_home_screen.show_error.assert_called_with("Please enter a passage to analyze.")
        assert deferred_runner.pending == []

    def test_success_displays_passage(self, coordinator, mock_home_screen, mock_passage_service, deferred_runner, interaction, sample_passage):
        mock_passage_service.annotate.return_value = sample_passage

        coordinator.handle_submit("Lower latency improves throughput.")
        assert coordinator.loading is True
        mock_home_screen.set_loading.assert_called_with(True)

        deferred_runner.run()

        assert coordinator.loading is False
        assert interaction.passage == sample_passage
        paragraphs = mock_home_screen.display_passage.call_args[0][0]
        assert paragraphs[0].text == "Lower latency improves throughput."

    def test_submit_ignored_while_loading(self, coordinator, deferred_runner):
        coordinator.handle_submit("first")
        coordinator.handle_submit("second")

        assert len(deferred_runner.pending) == 1

    def test_failure_keeps_previous_passage(self, coordinator, mock_passage_service, deferred_runner, interaction, sample_passage):
        interaction.replace_passage(sample_passage)
        mock_passage_service.annotate.side_effect = TransportError("down")

        coordinator.handle_submit("Another passage")
        deferred_runner.run()

        assert coordinator.error == "An error occurred while fetching keyword explanations."
        assert coordinator.loading is False
        assert interaction.passage == sample_passage

    def test_auth_expiry_requests_reauthentication(self, coordinator, mock_passage_service, mock_session, deferred_runner):
        mock_passage_service.annotate.side_effect = AuthExpiredError()

        coordinator.handle_submit("Some passage")
        deferred_runner.run()

        assert coordinator.error == AUTH_EXPIRED_MESSAGE
        mock_session.require_reauthentication.assert_called_once()

    def test_error_cleared_on_next_attempt(self, coordinator, mock_home_screen):
        coordinator.handle_submit("")
        coordinator.handle_submit("Now with text")

        assert coordinator.error == ""
        mock_home_screen.clear_error.assert_called()


# ============================================================================
# Word interaction
# ============================================================================


class TestWordInteraction:
    def test_word_click_delegates_and_shows_pending(self, coordinator, mock_home_screen, interaction, sample_passage, deferred_runner):
        interaction.replace_passage(sample_passage)

        coordinator.handle_word_clicked("throughput")

        mock_home_screen.set_pending_word.assert_called_with("throughput")
        assert len(deferred_runner.pending) == 1

    def test_lookup_failure_surfaces_error(self, coordinator, mock_passage_service, interaction, sample_passage, deferred_runner):
        interaction.replace_passage(sample_passage)
        mock_passage_service.request_explanation.side_effect = TransportError("down")

        coordinator.handle_word_clicked("throughput")
        deferred_runner.run()

        assert coordinator.error == "Failed to fetch an explanation for 'throughput'. Please try again."

    def test_known_word_is_recorded_on_session(self, coordinator, mock_passage_service, mock_session, interaction, sample_passage, deferred_runner):
        interaction.replace_passage(sample_passage)
        mock_passage_service.mark_known.return_value = Passage.from_payload([[{"word": "latency"}]])

        coordinator.handle_known_word_requested("latency")
        deferred_runner.run()

        mock_session.remember_known_keyword.assert_called_once_with("latency")

    def test_auth_expiry_during_lookup(self, coordinator, mock_passage_service, mock_session, interaction, sample_passage, deferred_runner):
        interaction.replace_passage(sample_passage)
        mock_passage_service.request_explanation.side_effect = AuthExpiredError()

        coordinator.handle_word_clicked("throughput")
        deferred_runner.run()

        mock_session.require_reauthentication.assert_called_once()


# ============================================================================
# Saving and the tip
# ============================================================================


class TestSave:
    def test_nothing_to_save(self, coordinator, mock_passage_service, deferred_runner):
        coordinator.handle_save()

        assert coordinator.error == "There is no passage to save yet."
        assert deferred_runner.pending == []

    def test_save_success(self, coordinator, mock_home_screen, mock_passage_service, interaction, sample_passage, deferred_runner):
        interaction.replace_passage(sample_passage)
        mock_passage_service.save.return_value = True

        coordinator.handle_save()
        deferred_runner.run()

        mock_passage_service.save.assert_called_once_with(sample_passage)
        mock_home_screen.show_notice.assert_called_once()
        assert coordinator.saving is False

    def test_save_rejected(self, coordinator, mock_passage_service, interaction, sample_passage, deferred_runner):
        interaction.replace_passage(sample_passage)
        mock_passage_service.save.return_value = False

        coordinator.handle_save()
        deferred_runner.run()

        assert coordinator.error == "Failed to save passage. Please try again."


class TestTip:
    def test_tip_visible_until_dismissed(self, coordinator, mock_home_screen, tip_store):
        assert coordinator.tip_visible is True
        mock_home_screen.set_tip_visible.assert_called_with(True)

        coordinator.dismiss_tip()

        assert coordinator.tip_visible is False
        assert tip_store.is_tip_dismissed() is True
        mock_home_screen.set_tip_visible.assert_called_with(False)

    def test_tip_hidden_when_previously_dismissed(self, mock_home_screen, interaction, mock_passage_service, mock_session, tip_store, deferred_runner):
        tip_store.dismiss_tip()

        coordinator = HomeCoordinator(mock_home_screen, interaction, mock_passage_service, mock_session, tip_store, deferred_runner)

        assert coordinator.tip_visible is False
