"""Client-side input validation run before any backend call."""

import re
from typing import List

from reading_assistant.core import AlreadyExistsError, NotFoundError, ValidationError, normalize_keyword

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def validate_passage_text(text: str) -> str:
    """Return the passage stripped of surrounding whitespace.

    Raises:
        ValidationError: If nothing is left to annotate.
    """
    stripped = (text or "").strip()
    if not stripped:
        raise ValidationError("Please enter a passage to analyze.")
    return stripped


def validate_email(email: str) -> str:
    email = (email or "").strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Please enter a valid email address")
    return email


def validate_password_change(current_password: str, new_password: str, confirm_password: str) -> None:
    """Check a password change triple before it is sent.

    Raises:
        ValidationError: Missing current password, mismatch or too short.
    """
    if not current_password:
        raise ValidationError("Please enter your current password")
    if new_password != confirm_password:
        raise ValidationError("New passwords do not match")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")


def validate_credentials(username: str, password: str) -> None:
    if not (username or "").strip():
        raise ValidationError("Please enter your username")
    if not password:
        raise ValidationError("Please enter your password")


def add_known_keyword(keywords: List[str], keyword: str) -> List[str]:
    """Return a new list with ``keyword`` appended in normalized form.

    Raises:
        ValidationError: Blank keyword.
        AlreadyExistsError: Keyword already in the list after normalization.
    """
    normalized = normalize_keyword(keyword or "")
    if not normalized:
        raise ValidationError("Please enter a keyword")
    if normalized in (normalize_keyword(k) for k in keywords):
        raise AlreadyExistsError("Keyword already exists")
    return [*keywords, normalized]


def remove_known_keyword(keywords: List[str], keyword: str) -> List[str]:
    normalized = normalize_keyword(keyword or "")
    remaining = [k for k in keywords if normalize_keyword(k) != normalized]
    if len(remaining) == len(keywords):
        raise NotFoundError(f"'{keyword}' is not in your known keywords")
    return remaining
