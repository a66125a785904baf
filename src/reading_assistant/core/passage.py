"""Passage entity - ordered paragraphs of word tokens."""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple

from .word_token import WordToken

Paragraph = List[WordToken]


@dataclass
class Passage:
    """Acts as the authoritative client-side copy of an annotated passage.

    The backend is the source of truth: mutations never edit tokens in
    place, a whole new Passage replaces the held one.
    """

    paragraphs: List[Paragraph] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "Passage":
        """Parse the backend's nested ``[[{word, explanation?}, ...], ...]`` list.

        Non-list paragraphs are treated as empty so a partially broken
        response still renders.
        """
        if not isinstance(payload, list):
            raise ValueError(f"Expected a list of paragraphs, got {type(payload).__name__}")

        paragraphs = []
        for raw_paragraph in payload:
            if not isinstance(raw_paragraph, list):
                paragraphs.append([])
                continue
            paragraphs.append([WordToken.from_payload(item) for item in raw_paragraph])
        return cls(paragraphs=paragraphs)

    def to_payload(self) -> List[List[Any]]:
        return [[token.to_payload() for token in paragraph] for paragraph in self.paragraphs]

    @property
    def is_empty(self) -> bool:
        return not any(self.paragraphs)

    def shape(self) -> Tuple[int, ...]:
        """Returns the number of tokens in each paragraph."""
        return tuple(len(paragraph) for paragraph in self.paragraphs)

    def tokens(self) -> Iterator[WordToken]:
        for paragraph in self.paragraphs:
            yield from paragraph

    def has_unexplained(self, word: str) -> bool:
        """True if some token with this exact text still lacks an explanation."""
        return any(t.word == word and not t.is_explained and not t.is_malformed for t in self.tokens())

    def has_explained(self, word: str) -> bool:
        """True if some token with this exact text carries an explanation."""
        return any(t.word == word and t.is_explained for t in self.tokens())


@dataclass(frozen=True)
class SavedPassage:
    """A passage persisted to the user's history.

    Attributes:
        id: Backend identifier used for deletion.
        passage: The annotated passage as it was saved.
    """

    id: int
    passage: Passage

    @classmethod
    def from_payload(cls, payload: Any) -> "SavedPassage":
        if not isinstance(payload, dict) or "id" not in payload:
            raise ValueError("Saved passage entry is missing its id")
        return cls(
            id=int(payload["id"]),
            passage=Passage.from_payload(payload.get("split_result_with_explanations", [])),
        )
