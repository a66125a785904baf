"""History screen - saved passages with their explanations."""

from typing import List, Optional, Tuple

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from reading_assistant.services.text_processing import RenderedParagraph
from reading_assistant.ui.passage_view import PassageView


class PassageCard(QFrame):
    """A single saved passage: header, delete button and read-only passage view.

    Signals:
        delete_requested: Emitted with the passage id when delete is clicked.
    """

    delete_requested = Signal(int)

    def __init__(self, passage_id: int, paragraphs: List[RenderedParagraph], parent=None):
        super().__init__(parent)
        self.passage_id = passage_id
        self.setFrameShape(QFrame.StyledPanel)

        layout = QVBoxLayout(self)
        header = QHBoxLayout()
        header.addWidget(QLabel(self.title_for(passage_id, paragraphs)))
        header.addStretch()
        self.delete_button = QPushButton("Delete")
        self.delete_button.clicked.connect(lambda: self.delete_requested.emit(self.passage_id))
        header.addWidget(self.delete_button)
        layout.addLayout(header)

        self.passage_view = PassageView(interactive=False)
        self.passage_view.setMinimumHeight(160)
        self.passage_view.display_passage(paragraphs)
        layout.addWidget(self.passage_view)

    @staticmethod
    def title_for(passage_id: int, paragraphs: List[RenderedParagraph], limit: int = 60) -> str:
        """Header text: the passage id followed by the start of its first paragraph."""
        title = f"Passage #{passage_id}"
        preview = paragraphs[0].text if paragraphs else ""
        if not preview:
            return title
        if len(preview) > limit:
            preview = preview[:limit].rstrip() + "..."
        return f"{title}: {preview}"

    def set_deleting(self, deleting: bool):
        self.delete_button.setEnabled(not deleting)
        self.delete_button.setText("Deleting..." if deleting else "Delete")


class HistoryScreen(QWidget):
    """Lists saved passages.

    Signals:
        delete_requested: User confirmed deletion of a passage id.
        back_requested: User wants to return to the main page.
    """

    delete_requested = Signal(int)
    back_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._cards: List[PassageCard] = []
        self._setup_ui()

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)

        back_button = QPushButton("Back to Main Page")
        back_button.clicked.connect(self.back_requested.emit)
        main_layout.addWidget(back_button, 0, Qt.AlignLeft)

        self.title_label = QLabel("Reading History")
        self.title_label.setStyleSheet("QLabel { font-size: 24px; font-weight: bold; }")
        main_layout.addWidget(self.title_label)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("QLabel { color: #c0392b; }")
        self.error_label.hide()
        main_layout.addWidget(self.error_label)

        self.loading_label = QLabel("Loading saved passages...")
        self.loading_label.hide()
        main_layout.addWidget(self.loading_label)

        self.empty_label = QLabel(
            "No Saved Passages Yet\n"
            "Start reading articles and save passages with explanations to see them here."
        )
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.hide()
        main_layout.addWidget(self.empty_label)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        self.list_container = QWidget()
        self.list_layout = QVBoxLayout(self.list_container)
        self.list_layout.addStretch()
        scroll_area.setWidget(self.list_container)
        main_layout.addWidget(scroll_area, 1)

    def set_loading(self, loading: bool):
        self.loading_label.setVisible(loading)
        if loading:
            self.empty_label.hide()

    def show_error(self, message: str):
        self.error_label.setText(message)
        self.error_label.show()

    def clear_error(self):
        self.error_label.clear()
        self.error_label.hide()

    def display_passages(self, passages: List[Tuple[int, List[RenderedParagraph]]], show_empty: bool = True):
        """Replace the list with the given (passage id, rendered paragraphs) pairs."""
        self._clear_cards()
        self.title_label.setText(f"Your Saved Passages ({len(passages)})" if passages else "Reading History")
        self.empty_label.setVisible(not passages and show_empty)

        for passage_id, paragraphs in passages:
            card = PassageCard(passage_id, paragraphs)
            card.delete_requested.connect(self._on_delete_requested)
            self.list_layout.insertWidget(self.list_layout.count() - 1, card)
            self._cards.append(card)

    def set_deleting(self, passage_id: Optional[int]):
        for card in self._cards:
            card.set_deleting(card.passage_id == passage_id)

    def _clear_cards(self):
        for card in self._cards:
            self.list_layout.removeWidget(card)
            card.deleteLater()
        self._cards = []

    def _on_delete_requested(self, passage_id: int):
        """Show confirmation dialog before emitting delete signal."""
        reply = QMessageBox.question(
            self,
            "Delete Passage",
            f"Delete passage #{passage_id} from your history?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if reply == QMessageBox.Yes:
            self.delete_requested.emit(passage_id)
