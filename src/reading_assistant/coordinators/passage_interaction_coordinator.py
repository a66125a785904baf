"""Passage Interaction Coordinator - word lookups and mark-as-known on the held passage."""

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from reading_assistant.core import AuthExpiredError, Passage, describe_error
from reading_assistant.services import AnnotationRenderer, PassageService, RenderedParagraph, TaskRunner

logger = logging.getLogger(__name__)


class PassageInteractionCoordinator(QObject):
    """
    Owns the passage currently on screen and every mutation applied to it.

    Responsibilities:
    - Request an explanation for an unexplained word (one lookup in flight)
    - Mark an explained word as known (one mark in flight)
    - Replace the held passage with whatever the backend returns
    - Drop responses whose request is no longer the active one
    - Leave the passage untouched when a call fails
    """

    passage_changed = Signal(object)  # List[RenderedParagraph]
    pending_word_changed = Signal(str)  # "" when no lookup is in flight
    error_occurred = Signal(str)
    auth_expired = Signal()
    known_word_added = Signal(str)

    LOOKUP_FAILED_MESSAGE = "Failed to fetch an explanation for '{word}'. Please try again."
    MARK_KNOWN_FAILED_MESSAGE = "Failed to mark '{word}' as known. Please try again."

    def __init__(self, passage_service: PassageService, renderer: AnnotationRenderer, task_runner: TaskRunner):
        super().__init__()

        self.passage_service = passage_service
        self.renderer = renderer
        self.task_runner = task_runner

        # Session state
        self.passage: Optional[Passage] = None
        self.pending_word: Optional[str] = None
        self.marking_word: Optional[str] = None

        # Track active requests so a superseded response never overwrites newer state
        self._epoch = 0
        self._request_counter = 0
        self._active_lookup_id: Optional[int] = None
        self._active_mark_id: Optional[int] = None

    @property
    def epoch(self) -> int:
        return self._epoch

    def render(self) -> List[RenderedParagraph]:
        return self.renderer.render(self.passage, self.pending_word)

    def begin_new_passage(self) -> int:
        """Invalidate in-flight word requests ahead of a new submission.

        Returns:
            The epoch the submission result must carry to be applied.
        """
        self._epoch += 1
        self._clear_in_flight()
        return self._epoch

    def replace_passage(self, passage: Passage, epoch: Optional[int] = None) -> bool:
        """Hold ``passage`` unless it belongs to a superseded submission."""
        if epoch is not None and epoch != self._epoch:
            logger.info("Discarding passage from superseded submission (epoch %s, current %s)", epoch, self._epoch)
            return False
        self.passage = passage
        self._emit_passage()
        return True

    def reset(self):
        """Forget the passage and ignore every in-flight response (logout, navigation)."""
        self._epoch += 1
        self.passage = None
        self._clear_in_flight()
        self._emit_passage()

    @Slot(str)
    def request_explanation(self, word: str) -> bool:
        """Ask the backend to explain an unexplained word.

        Returns:
            True if a request was issued.
        """
        if self.passage is None or not word:
            return False
        if self.pending_word is not None:
            logger.debug("Ignoring lookup for %r: %r is still pending", word, self.pending_word)
            return False
        if not self.passage.has_unexplained(word):
            logger.debug("Ignoring lookup for %r: no unexplained token", word)
            return False

        request_id = self._next_request_id()
        self._active_lookup_id = request_id
        self.pending_word = word
        self.pending_word_changed.emit(word)
        self._emit_passage()

        snapshot = self.passage
        self.task_runner.submit(
            lambda: self.passage_service.request_explanation(snapshot, word),
            on_result=lambda passage: self._handle_lookup_result(passage, request_id),
            on_error=lambda error: self._handle_lookup_error(error, word, request_id),
        )
        return True

    @Slot(str)
    def mark_known(self, word: str) -> bool:
        """Dismiss an explained word.

        Calling it for a word with nothing left to dismiss is a no-op.

        Returns:
            True if a request was issued.
        """
        if self.passage is None or not word:
            return False
        if self.marking_word is not None:
            logger.debug("Ignoring mark-known for %r: %r is in flight", word, self.marking_word)
            return False
        if not self.passage.has_explained(word):
            logger.debug("Ignoring mark-known for %r: no explained token", word)
            return False

        request_id = self._next_request_id()
        self._active_mark_id = request_id
        self.marking_word = word

        snapshot = self.passage
        self.task_runner.submit(
            lambda: self.passage_service.mark_known(snapshot, word),
            on_result=lambda passage: self._handle_mark_result(passage, word, request_id),
            on_error=lambda error: self._handle_mark_error(error, word, request_id),
        )
        return True

    def _handle_lookup_result(self, passage: Passage, request_id: int):
        if request_id != self._active_lookup_id:
            logger.info("Discarding stale explanation response (request %s)", request_id)
            return
        self._active_lookup_id = None
        self.pending_word = None
        self.pending_word_changed.emit("")
        self._apply(passage)

    def _handle_lookup_error(self, error: BaseException, word: str, request_id: int):
        if request_id != self._active_lookup_id:
            return
        self._active_lookup_id = None
        self.pending_word = None
        self.pending_word_changed.emit("")
        self._emit_passage()
        self._report(error, self.LOOKUP_FAILED_MESSAGE.format(word=word))

    def _handle_mark_result(self, passage: Passage, word: str, request_id: int):
        if request_id != self._active_mark_id:
            logger.info("Discarding stale mark-known response (request %s)", request_id)
            return
        self._active_mark_id = None
        self.marking_word = None
        self._apply(passage)
        self.known_word_added.emit(word)

    def _handle_mark_error(self, error: BaseException, word: str, request_id: int):
        if request_id != self._active_mark_id:
            return
        self._active_mark_id = None
        self.marking_word = None
        self._report(error, self.MARK_KNOWN_FAILED_MESSAGE.format(word=word))

    def _apply(self, passage: Passage):
        if self.passage is not None and passage.shape() != self.passage.shape():
            logger.warning(
                "Backend returned a passage with a different shape (%s -> %s); using it as-is",
                self.passage.shape(),
                passage.shape(),
            )
        self.passage = passage
        self._emit_passage()

    def _report(self, error: BaseException, fallback: str):
        message = describe_error(error, fallback)
        logger.warning("%s (%s: %s)", fallback, type(error).__name__, error)
        self.error_occurred.emit(message)
        if isinstance(error, AuthExpiredError):
            self.auth_expired.emit()

    def _emit_passage(self):
        self.passage_changed.emit(self.render())

    def _clear_in_flight(self):
        had_pending = self.pending_word is not None
        self._active_lookup_id = None
        self._active_mark_id = None
        self.pending_word = None
        self.marking_word = None
        if had_pending:
            self.pending_word_changed.emit("")

    def _next_request_id(self) -> int:
        self._request_counter += 1
        return self._request_counter
