"""Home screen - passage input, tip banner and the annotated passage."""

from typing import List

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from reading_assistant.services.text_processing import RenderedParagraph
from reading_assistant.ui.passage_view import PassageView

TIP_TEXT = (
    "Tip: hover an underlined word to read its explanation. "
    "Click any other word to get an explanation for it, "
    "or right-click an underlined word to mark it as known."
)


class HomeScreen(QWidget):
    """Main reading screen.

    Signals:
        submit_requested: Passage text the user wants annotated.
        save_requested: User asked to save the current passage.
        tip_dismissed: User closed the tip banner.
        word_clicked: Plain word clicked (request an explanation).
        known_word_requested: Highlighted word right-clicked (mark as known).
    """

    submit_requested = Signal(str)
    save_requested = Signal()
    tip_dismissed = Signal()
    word_clicked = Signal(str)
    known_word_requested = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        title_label = QLabel("Technical Article Reading Helper")
        title_label.setStyleSheet("QLabel { font-size: 24px; font-weight: bold; padding-bottom: 10px; }")
        layout.addWidget(title_label)

        # Dismissible tip banner
        self.tip_frame = QFrame()
        tip_layout = QHBoxLayout(self.tip_frame)
        tip_label = QLabel(TIP_TEXT)
        tip_label.setWordWrap(True)
        tip_close = QPushButton("Got it")
        tip_close.clicked.connect(self.tip_dismissed.emit)
        tip_layout.addWidget(tip_label, 1)
        tip_layout.addWidget(tip_close)
        self.tip_frame.setStyleSheet("QFrame { background-color: #dbeafe; border-radius: 6px; }")
        layout.addWidget(self.tip_frame)

        self.passage_input = QPlainTextEdit()
        self.passage_input.setPlaceholderText("Enter your passage here...")
        self.passage_input.setMaximumHeight(180)
        layout.addWidget(self.passage_input)

        button_row = QHBoxLayout()
        self.submit_button = QPushButton("Get Keyword Explanations")
        self.submit_button.clicked.connect(self._on_submit_clicked)
        self.save_button = QPushButton("Save Passage")
        self.save_button.setEnabled(False)
        self.save_button.clicked.connect(self.save_requested.emit)
        button_row.addWidget(self.submit_button)
        button_row.addWidget(self.save_button)
        button_row.addStretch()
        layout.addLayout(button_row)

        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("QLabel { color: #c0392b; }")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        self.status_label = QLabel()
        self.status_label.setStyleSheet("QLabel { color: #888; }")
        self.status_label.hide()
        layout.addWidget(self.status_label)

        self.passage_view = PassageView(interactive=True)
        self.passage_view.word_clicked.connect(self.word_clicked.emit)
        self.passage_view.known_word_requested.connect(self.known_word_requested.emit)
        layout.addWidget(self.passage_view, 1)

    def _on_submit_clicked(self):
        self.submit_requested.emit(self.passage_input.toPlainText())

    def set_loading(self, loading: bool):
        self.submit_button.setEnabled(not loading)
        self.submit_button.setText("Processing..." if loading else "Get Keyword Explanations")

    def set_saving(self, saving: bool):
        self.save_button.setText("Saving..." if saving else "Save Passage")
        if saving:
            self.save_button.setEnabled(False)

    def set_save_enabled(self, enabled: bool):
        self.save_button.setEnabled(enabled)

    def set_tip_visible(self, visible: bool):
        self.tip_frame.setVisible(visible)

    def set_pending_word(self, word: str):
        if word:
            self.status_label.setText(f"Fetching an explanation for '{word}'...")
            self.status_label.show()
        else:
            self.status_label.hide()

    def show_error(self, message: str):
        self.error_label.setText(message)
        self.error_label.show()

    def clear_error(self):
        self.error_label.clear()
        self.error_label.hide()

    def display_passage(self, paragraphs: List[RenderedParagraph]):
        self.passage_view.display_passage(paragraphs)
        self.set_save_enabled(bool(paragraphs))

    def show_notice(self, message: str):
        self.status_label.setText(message)
        self.status_label.show()
