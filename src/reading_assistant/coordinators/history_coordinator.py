"""History Coordinator - saved passages listing and deletion."""

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from reading_assistant.core import AuthExpiredError, SavedPassage, describe_error
from reading_assistant.services import AnnotationRenderer, PassageService, TaskRunner
from reading_assistant.ui import HistoryScreen, MainWindow

from .session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)


class HistoryCoordinator(QObject):
    """Manages the reading-history screen.

    Responsibilities:
    - Fetch saved passages when the page is shown
    - Delete one passage at a time, removing it locally on success
    - Surface failures inline (auth expiry distinctly)
    """

    back_requested = Signal()

    FETCH_FAILED_MESSAGE = "Failed to fetch saved passages. Please try again."
    DELETE_FAILED_MESSAGE = "Failed to delete passage. Please try again."

    def __init__(
        self,
        history_screen: HistoryScreen,
        passage_service: PassageService,
        renderer: AnnotationRenderer,
        session: SessionCoordinator,
        main_window: MainWindow,
        task_runner: TaskRunner,
    ):
        super().__init__()

        self.history_screen = history_screen
        self.passage_service = passage_service
        self.renderer = renderer
        self.session = session
        self.main_window = main_window
        self.task_runner = task_runner

        self.passages: List[SavedPassage] = []
        self.loading = False
        self.deleting_id: Optional[int] = None
        self.error = ""

        self.history_screen.delete_requested.connect(self.handle_delete)
        self.history_screen.back_requested.connect(self._on_back_requested)

    def show(self):
        """Reload saved passages (called whenever the page is displayed)."""
        if self.loading:
            return
        self._set_error("")
        self.loading = True
        self.history_screen.set_loading(True)
        self.task_runner.submit(
            self.passage_service.list_saved,
            on_result=self._handle_fetched,
            on_error=self._handle_fetch_error,
        )

    @Slot(int)
    def handle_delete(self, passage_id: int):
        if self.deleting_id is not None:
            return
        self._set_error("")
        self.deleting_id = passage_id
        self.history_screen.set_deleting(passage_id)
        self.task_runner.submit(
            lambda: self.passage_service.delete_saved(passage_id),
            on_result=lambda success: self._handle_deleted(passage_id, success),
            on_error=self._handle_delete_error,
        )

    def _handle_fetched(self, passages: List[SavedPassage]):
        self.loading = False
        self.history_screen.set_loading(False)
        self.passages = list(passages)
        self._display()

    def _handle_fetch_error(self, error: BaseException):
        self.loading = False
        self.history_screen.set_loading(False)
        logger.warning("Fetching saved passages failed: %s", error)
        self._fail(error, self.FETCH_FAILED_MESSAGE)
        self._display()

    def _handle_deleted(self, passage_id: int, success: bool):
        self._finish_delete()
        if not success:
            self._set_error(self.DELETE_FAILED_MESSAGE)
            return
        self.passages = [p for p in self.passages if p.id != passage_id]
        self._display()
        self.main_window.show_info("Success!", "Passage deleted successfully")

    def _handle_delete_error(self, error: BaseException):
        self._finish_delete()
        logger.warning("Deleting passage failed: %s", error)
        self._fail(error, self.DELETE_FAILED_MESSAGE)

    def _finish_delete(self):
        self.deleting_id = None
        self.history_screen.set_deleting(None)

    def _display(self):
        self.history_screen.display_passages(
            [(saved.id, self.renderer.render(saved.passage)) for saved in self.passages],
            show_empty=not self.error,
        )

    def _fail(self, error: BaseException, fallback: str):
        self._set_error(describe_error(error, fallback))
        if isinstance(error, AuthExpiredError):
            self.session.require_reauthentication()

    def _set_error(self, message: str):
        self.error = message
        if message:
            self.history_screen.show_error(message)
        else:
            self.history_screen.clear_error()

    def _on_back_requested(self):
        self.back_requested.emit()
