"""Home Coordinator - passage submission, saving and the reading tip."""

import logging
from typing import List

from PySide6.QtCore import QObject, Slot

from reading_assistant.core import AuthExpiredError, Passage, ValidationError, describe_error
from reading_assistant.io import TipStore
from reading_assistant.services import PassageService, RenderedParagraph, TaskRunner
from reading_assistant.services.validation import validate_passage_text
from reading_assistant.ui import HomeScreen

from .passage_interaction_coordinator import PassageInteractionCoordinator
from .session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)


class HomeCoordinator(QObject):
    """
    Page controller for the reading screen.

    Page state:
    - loading: a submission is in flight (further submits are ignored)
    - saving: a save is in flight
    - error: last failure message, cleared on the next attempt
    - tip_visible: the one-time tip, persisted locally once dismissed
    """

    SUBMIT_FAILED_MESSAGE = "An error occurred while fetching keyword explanations."
    SAVE_FAILED_MESSAGE = "Failed to save passage. Please try again."
    NOTHING_TO_SAVE_MESSAGE = "There is no passage to save yet."

    def __init__(
        self,
        home_screen: HomeScreen,
        interaction: PassageInteractionCoordinator,
        passage_service: PassageService,
        session: SessionCoordinator,
        tip_store: TipStore,
        task_runner: TaskRunner,
    ):
        super().__init__()

        self.home_screen = home_screen
        self.interaction = interaction
        self.passage_service = passage_service
        self.session = session
        self.tip_store = tip_store
        self.task_runner = task_runner

        self.loading = False
        self.saving = False
        self.error = ""
        self.tip_visible = not self.tip_store.is_tip_dismissed()

        # Wire screen signals
        self.home_screen.submit_requested.connect(self.handle_submit)
        self.home_screen.save_requested.connect(self.handle_save)
        self.home_screen.tip_dismissed.connect(self.dismiss_tip)
        self.home_screen.word_clicked.connect(self.handle_word_clicked)
        self.home_screen.known_word_requested.connect(self.handle_known_word_requested)

        # Wire interaction signals
        self.interaction.passage_changed.connect(self._on_passage_changed)
        self.interaction.pending_word_changed.connect(self._on_pending_word_changed)
        self.interaction.error_occurred.connect(self._set_error)
        self.interaction.auth_expired.connect(self._on_auth_expired)
        self.interaction.known_word_added.connect(self._on_known_word_added)

        self.home_screen.set_tip_visible(self.tip_visible)

    @Slot(str)
    def handle_submit(self, text: str):
        if self.loading:
            return
        self._clear_error()

        try:
            passage_text = validate_passage_text(text)
        except ValidationError as e:
            self._set_error(str(e))
            return

        self._set_loading(True)
        epoch = self.interaction.begin_new_passage()
        self.task_runner.submit(
            lambda: self.passage_service.annotate(passage_text),
            on_result=lambda passage: self._handle_submit_result(passage, epoch),
            on_error=lambda error: self._handle_submit_error(error, epoch),
        )

    @Slot()
    def handle_save(self):
        if self.saving:
            return
        self._clear_error()

        passage = self.interaction.passage
        if passage is None or passage.is_empty:
            self._set_error(self.NOTHING_TO_SAVE_MESSAGE)
            return

        self._set_saving(True)
        self.task_runner.submit(
            lambda: self.passage_service.save(passage),
            on_result=self._handle_save_result,
            on_error=self._handle_save_error,
        )

    @Slot(str)
    def handle_word_clicked(self, word: str):
        self._clear_error()
        self.interaction.request_explanation(word)

    @Slot(str)
    def handle_known_word_requested(self, word: str):
        self._clear_error()
        self.interaction.mark_known(word)

    @Slot()
    def dismiss_tip(self):
        self.tip_visible = False
        self.tip_store.dismiss_tip()
        self.home_screen.set_tip_visible(False)

    def _handle_submit_result(self, passage: Passage, epoch: int):
        self._set_loading(False)
        if passage.is_empty:
            logger.info("Backend returned an empty passage")
        self.interaction.replace_passage(passage, epoch)

    def _handle_submit_error(self, error: BaseException, epoch: int):
        self._set_loading(False)
        if epoch != self.interaction.epoch:
            return
        logger.warning("Passage submission failed: %s", error)
        self._set_error(describe_error(error, self.SUBMIT_FAILED_MESSAGE))
        if isinstance(error, AuthExpiredError):
            self.session.require_reauthentication()

    def _handle_save_result(self, success: bool):
        self._set_saving(False)
        if success:
            self.home_screen.show_notice("Passage saved to your reading history.")
        else:
            self._set_error(self.SAVE_FAILED_MESSAGE)

    def _handle_save_error(self, error: BaseException):
        self._set_saving(False)
        logger.warning("Saving passage failed: %s", error)
        self._set_error(describe_error(error, self.SAVE_FAILED_MESSAGE))
        if isinstance(error, AuthExpiredError):
            self.session.require_reauthentication()

    def _on_passage_changed(self, paragraphs: List[RenderedParagraph]):
        self.home_screen.display_passage(paragraphs)

    def _on_pending_word_changed(self, word: str):
        self.home_screen.set_pending_word(word)

    def _on_auth_expired(self):
        self.session.require_reauthentication()

    def _on_known_word_added(self, word: str):
        self.session.remember_known_keyword(word)

    def _set_loading(self, loading: bool):
        self.loading = loading
        self.home_screen.set_loading(loading)

    def _set_saving(self, saving: bool):
        self.saving = saving
        self.home_screen.set_saving(saving)
        if not saving:
            self.home_screen.set_save_enabled(self.interaction.passage is not None)

    def _set_error(self, message: str):
        self.error = message
        self.home_screen.show_error(message)

    def _clear_error(self):
        self.error = ""
        self.home_screen.clear_error()
