"""Inter-token spacing rules for reconstructing prose from word tokens."""

from typing import Optional

OPENING_BRACKETS = ("(", "[", "{")
CLOSING_PUNCTUATION = (".", ",", ";", ":", "!", "?", ")", "]", "}")


def needs_space_after(current: str, next_word: Optional[str]) -> bool:
    """
    Decide whether a single space follows ``current``.

    Rules:
    - No space after the last token of a paragraph (``next_word`` is None)
    - No space after a token ending with an opening bracket
    - No space before a token starting with closing punctuation
    - No space after an empty (malformed) token

    Args:
        current: Text of the current token.
        next_word: Text of the following token, or None at paragraph end.
    """
    if next_word is None or not current:
        return False
    if current.endswith(OPENING_BRACKETS):
        return False
    if next_word.startswith(CLOSING_PUNCTUATION):
        return False
    return True
