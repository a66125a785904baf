"""Text processing services - spacing rules and annotation rendering."""

from reading_assistant.services.text_processing.annotation_renderer import (
    AnnotationRenderer,
    RenderedParagraph,
    RenderedToken,
    TokenState,
)
from reading_assistant.services.text_processing.spacing import (
    CLOSING_PUNCTUATION,
    OPENING_BRACKETS,
    needs_space_after,
)

__all__ = [
    "AnnotationRenderer",
    "RenderedParagraph",
    "RenderedToken",
    "TokenState",
    "CLOSING_PUNCTUATION",
    "OPENING_BRACKETS",
    "needs_space_after",
]
