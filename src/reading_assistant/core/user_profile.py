"""User profile entities shared by the account service and coordinators."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def normalize_keyword(text: str) -> str:
    """
    Normalize a keyword for known-keyword comparisons.

    Rules:
    - Trim leading and trailing whitespace
    - Collapse inner runs of whitespace to single spaces
    - Lower-case

    Args:
        text: Keyword as typed by the user or returned by the backend.

    Returns:
        Normalized keyword ("" for blank input).
    """
    text = text.strip()
    text = re.sub(r"\s+", " ", text)
    return text.lower()


@dataclass(frozen=True)
class KeywordExplanationPair:
    """A durable history record of a keyword explained to the user."""

    keyword: str
    explanation: str
    reason: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "KeywordExplanationPair":
        reason = payload.get("reason")
        return cls(
            keyword=str(payload.get("keyword", "")),
            explanation=str(payload.get("explanation", "")),
            reason=str(reason) if reason else None,
        )


@dataclass
class User:
    """The signed-in user as reported by the backend.

    ``known_keywords`` preserves display order but holds each normalized
    keyword at most once.
    """

    id: int
    username: str
    email: str
    bio: Optional[str] = None
    known_keywords: List[str] = field(default_factory=list)
    all_keyword_explanation_pairs: List[KeywordExplanationPair] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "User":
        if not isinstance(payload, dict):
            raise ValueError("User payload must be an object")

        known: List[str] = []
        for raw in payload.get("known_keywords") or []:
            if not isinstance(raw, str):
                continue
            keyword = normalize_keyword(raw)
            if keyword and keyword not in known:
                known.append(keyword)

        pairs = [
            KeywordExplanationPair.from_payload(item)
            for item in payload.get("all_keyword_explanation_pairs") or []
            if isinstance(item, dict)
        ]

        return cls(
            id=int(payload.get("id", 0)),
            username=str(payload.get("username", "")),
            email=str(payload.get("email", "") or ""),
            bio=payload.get("bio") or None,
            known_keywords=known,
            all_keyword_explanation_pairs=pairs,
        )

    def add_known_keyword(self, keyword: str) -> bool:
        """Record a keyword as known.

        Returns:
            True if added, False if blank or already present.
        """
        normalized = normalize_keyword(keyword)
        if not normalized or normalized in self.known_keywords:
            return False
        self.known_keywords.append(normalized)
        return True


@dataclass(frozen=True)
class AccountResult:
    """Normalized outcome of an account operation ({success, message, user?})."""

    success: bool
    message: str
    user: Optional[User] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], default_message: str = "") -> "AccountResult":
        """Build from a response body; ``default_message`` fills in a missing failure message."""
        success = bool(payload.get("success", False))
        user_payload = payload.get("user")
        return cls(
            success=success,
            message=str(payload.get("message") or ("" if success else default_message)),
            user=User.from_payload(user_payload) if isinstance(user_payload, dict) else None,
        )
