"""Domain layer - Pure entities representing annotated passages and users."""

from .errors import (
    AUTH_EXPIRED_MESSAGE,
    AlreadyExistsError,
    AuthExpiredError,
    NotFoundError,
    ReadingAssistantError,
    TransportError,
    ValidationError,
    describe_error,
)
from .passage import Paragraph, Passage, SavedPassage
from .user_profile import AccountResult, KeywordExplanationPair, User, normalize_keyword
from .word_token import WordToken

__all__ = [
    "WordToken",
    "Paragraph",
    "Passage",
    "SavedPassage",
    "User",
    "KeywordExplanationPair",
    "AccountResult",
    "normalize_keyword",
    "AUTH_EXPIRED_MESSAGE",
    "ReadingAssistantError",
    "AuthExpiredError",
    "ValidationError",
    "TransportError",
    "AlreadyExistsError",
    "NotFoundError",
    "describe_error",
]
