"""
Reading Assistant - A desktop companion for reading technical articles.

This package provides a client for the reading-assistant backend with:
- Keyword annotation of pasted passages
- On-demand explanations for single words
- Known-keyword tracking
- Saved reading history
"""

__version__ = "0.1.0"

# Make key components available at package level
from reading_assistant.core import Passage, User, WordToken
from reading_assistant.io import ApiClient

__all__ = [
    "Passage",
    "User",
    "WordToken",
    "ApiClient",
]
