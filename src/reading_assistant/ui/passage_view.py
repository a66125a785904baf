"""Passage View - Renders an annotated passage with tooltips using QWebEngineView."""

import html
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QVBoxLayout, QWidget

from reading_assistant.services.text_processing import RenderedParagraph, RenderedToken, TokenState

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "assets"

_TOKEN_TEMPLATES = {
    TokenState.EXPLAINED: "explained_token_template.html",
    TokenState.UNEXPLAINED: "unexplained_token_template.html",
    TokenState.PENDING: "pending_token_template.html",
}


class WebConnector(QObject):
    """Object exposed to page JavaScript as ``bridge`` through QWebChannel."""

    word_clicked = Signal(int, int)  # paragraph index, token index
    word_dismissed = Signal(int, int)

    @Slot(int, int)
    def wordClicked(self, paragraph_index: int, index: int):
        self.word_clicked.emit(paragraph_index, index)

    @Slot(int, int)
    def wordDismissed(self, paragraph_index: int, index: int):
        self.word_dismissed.emit(paragraph_index, index)


class PassageView(QWidget):
    """Shows rendered paragraphs; explained words reveal their explanation on hover.

    In interactive mode a left click on a plain word emits ``word_clicked``
    and a right click on a highlighted word emits ``known_word_requested``.
    """

    word_clicked = Signal(str)
    known_word_requested = Signal(str)

    def __init__(self, interactive: bool = True):
        super().__init__()
        self.interactive = interactive

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.web_view = QWebEngineView()
        layout.addWidget(self.web_view)

        self.connector = WebConnector()
        self.channel = QWebChannel()
        self.channel.registerObject("bridge", self.connector)
        self.web_view.page().setWebChannel(self.channel)

        self.connector.word_clicked.connect(self._on_word_clicked)
        self.connector.word_dismissed.connect(self._on_word_dismissed)

        self._paragraphs: List[RenderedParagraph] = []

    def display_passage(self, paragraphs: List[RenderedParagraph]):
        self._paragraphs = list(paragraphs)
        if not self._paragraphs:
            self.clear()
            return
        self.web_view.setHtml(self._generate_html(self._paragraphs))

    def clear(self):
        self._paragraphs = []
        self.web_view.setHtml("<html><body></body></html>")

    def token_at(self, paragraph_index: int, index: int) -> Optional[RenderedToken]:
        if not 0 <= paragraph_index < len(self._paragraphs):
            return None
        tokens = self._paragraphs[paragraph_index].tokens
        if not 0 <= index < len(tokens):
            return None
        return tokens[index]

    def _on_word_clicked(self, paragraph_index: int, index: int):
        if not self.interactive:
            return
        token = self.token_at(paragraph_index, index)
        if token is not None and token.state is TokenState.UNEXPLAINED and token.text:
            self.word_clicked.emit(token.text)

    def _on_word_dismissed(self, paragraph_index: int, index: int):
        if not self.interactive:
            return
        token = self.token_at(paragraph_index, index)
        if token is not None and token.state is TokenState.EXPLAINED:
            self.known_word_requested.emit(token.text)

    def _generate_html(self, paragraphs: List[RenderedParagraph]) -> str:
        page_template = self._load_template("passage_template.html")
        paragraph_template = self._load_template("paragraph_template.html")

        paragraphs_html = "\n".join(
            paragraph_template.format(tokens_html=self._generate_tokens_html(paragraph))
            for paragraph in paragraphs
        )
        body_class = "interactive" if self.interactive else "static"
        return page_template.replace("{body_class}", body_class).replace("{content_html}", paragraphs_html)

    def _generate_tokens_html(self, paragraph: RenderedParagraph) -> str:
        parts = []
        for token in paragraph.tokens:
            template = self._load_template(_TOKEN_TEMPLATES[token.state])
            parts.append(
                template.format(
                    paragraph_index=token.paragraph_index,
                    index=token.index,
                    text=html.escape(token.text),
                    explanation=html.escape(token.explanation or ""),
                )
            )
            if token.trailing_space:
                parts.append(" ")
        return "".join(parts)

    def _load_template(self, filename: str) -> str:
        """Load a template file from the assets directory."""
        template_path = TEMPLATES_DIR / filename
        return template_path.read_text(encoding="utf-8")
