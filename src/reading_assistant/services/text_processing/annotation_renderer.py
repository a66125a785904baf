"""Annotation Renderer - turns a Passage into display-ready tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from reading_assistant.core import Passage, WordToken
from reading_assistant.services.text_processing.spacing import needs_space_after


class TokenState(Enum):
    """How a token is presented and which action it affords."""

    EXPLAINED = "explained"  # hover shows explanation; secondary action marks known
    UNEXPLAINED = "unexplained"  # plain text; primary action requests an explanation
    PENDING = "pending"  # explanation request in flight


@dataclass(frozen=True)
class RenderedToken:
    paragraph_index: int
    index: int
    text: str
    explanation: Optional[str]
    state: TokenState
    trailing_space: bool


@dataclass(frozen=True)
class RenderedParagraph:
    index: int
    tokens: List[RenderedToken]

    @property
    def text(self) -> str:
        return "".join(t.text + (" " if t.trailing_space else "") for t in self.tokens)


class AnnotationRenderer:
    """Derives the presentation of every token from the passage and controller state.

    Stateless; the only input besides the passage is the word whose
    explanation is currently being fetched.
    """

    def render(self, passage: Optional[Passage], pending_word: Optional[str] = None) -> List[RenderedParagraph]:
        if passage is None:
            return []

        rendered = []
        for p_idx, paragraph in enumerate(passage.paragraphs):
            tokens = []
            for w_idx, token in enumerate(paragraph):
                next_word = paragraph[w_idx + 1].word if w_idx + 1 < len(paragraph) else None
                tokens.append(
                    RenderedToken(
                        paragraph_index=p_idx,
                        index=w_idx,
                        text=token.word,
                        explanation=token.explanation,
                        state=self.token_state(token, pending_word),
                        trailing_space=needs_space_after(token.word, next_word),
                    )
                )
            rendered.append(RenderedParagraph(index=p_idx, tokens=tokens))
        return rendered

    @staticmethod
    def token_state(token: WordToken, pending_word: Optional[str] = None) -> TokenState:
        if token.is_explained:
            return TokenState.EXPLAINED
        if pending_word is not None and token.word == pending_word and not token.is_malformed:
            return TokenState.PENDING
        return TokenState.UNEXPLAINED
