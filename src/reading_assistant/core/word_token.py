"""WordToken entity - a single word of a passage plus its optional explanation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WordToken:
    """Represents one tokenized word produced by the backend.

    A token with a non-empty explanation is "explained"; otherwise it is
    eligible for an on-demand explanation lookup.

    Attributes:
        word: The token text exactly as the backend split it.
        explanation: AI-generated explanation, or None when unexplained.
        is_malformed: True when the payload had no usable ``word`` field.
        raw: The original payload of a malformed token, sent back unchanged.
    """

    word: str
    explanation: Optional[str] = None
    is_malformed: bool = False
    raw: Any = field(default=None, compare=False, repr=False)

    @property
    def is_explained(self) -> bool:
        """Returns True when the token carries a non-empty explanation."""
        return bool(self.explanation)

    @classmethod
    def from_payload(cls, payload: Any) -> "WordToken":
        """Build a token from a backend ``{word, explanation?}`` object.

        Never raises: anything unusable becomes an empty malformed token.
        """
        if not isinstance(payload, dict):
            return cls(word="", explanation=None, is_malformed=True, raw=payload)

        word = payload.get("word")
        explanation = payload.get("explanation")
        if not isinstance(explanation, str) or not explanation:
            explanation = None

        if not isinstance(word, str):
            return cls(word="", explanation=explanation, is_malformed=True, raw=payload)
        return cls(word=word, explanation=explanation)

    def to_payload(self) -> Any:
        """Serialize back to the backend shape (explanation omitted when absent).

        Malformed tokens return the entry exactly as the backend sent it.
        """
        if self.is_malformed:
            return self.raw
        payload: Dict[str, str] = {"word": self.word}
        if self.explanation:
            payload["explanation"] = self.explanation
        return payload
