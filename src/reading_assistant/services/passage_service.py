"""Passage Service - annotation, re-explanation and saved-passage operations."""

import logging
from typing import Any, Dict, List

from reading_assistant.core import Passage, SavedPassage, TransportError
from reading_assistant.io import ApiClient
from reading_assistant.services.validation import validate_passage_text

logger = logging.getLogger(__name__)


class PassageService:
    """Application service for everything done to a passage on the backend.

    Every mutation returns the backend's full replacement Passage; the
    client never merges fields itself. All calls are safe to retry.
    """

    ANNOTATE_PATH = "/get_keywords/"
    NEW_KEYWORD_PATH = "/new_keyword/"
    MARK_KNOWN_PATH = "/add_known_word_to_passage/"
    SAVE_PATH = "/save_passage/"
    LIST_SAVED_PATH = "/get_all_saved_passages/"
    DELETE_SAVED_PATH = "/delete_saved_passage/"

    PASSAGE_KEY = "keywords_with_explanations"
    # Older backends shipped the key misspelled
    LEGACY_PASSAGE_KEY = "keywords_with_expanations"

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def annotate(self, text: str) -> Passage:
        """Submit raw text and receive the annotated passage.

        Raises:
            ValidationError: Empty passage (no network call is made).
        """
        passage_text = validate_passage_text(text)
        body = self._api.post(self.ANNOTATE_PATH, {"passage": passage_text})
        return self._extract_passage(body, self.ANNOTATE_PATH)

    def request_explanation(self, passage: Passage, word: str) -> Passage:
        body = self._api.post(
            self.NEW_KEYWORD_PATH,
            {self.PASSAGE_KEY: passage.to_payload(), "requested_word": word},
        )
        return self._extract_passage(body, self.NEW_KEYWORD_PATH)

    def mark_known(self, passage: Passage, word: str) -> Passage:
        body = self._api.post(
            self.MARK_KNOWN_PATH,
            {self.PASSAGE_KEY: passage.to_payload(), "word": word},
        )
        return self._extract_passage(body, self.MARK_KNOWN_PATH)

    def save(self, passage: Passage) -> bool:
        body = self._api.post(self.SAVE_PATH, {self.PASSAGE_KEY: passage.to_payload()})
        return bool(body.get("success", False))

    def list_saved(self) -> List[SavedPassage]:
        body = self._api.get(self.LIST_SAVED_PATH)
        entries = body.get("passages")
        if not isinstance(entries, list):
            raise TransportError(f"Response from {self.LIST_SAVED_PATH} did not include passages")

        saved = []
        for entry in entries:
            try:
                saved.append(SavedPassage.from_payload(entry))
            except (ValueError, TypeError) as e:
                logger.warning("Skipping unreadable saved passage: %s", e)
        return saved

    def delete_saved(self, passage_id: int) -> bool:
        body = self._api.post(self.DELETE_SAVED_PATH, {"passage_id": passage_id})
        return bool(body.get("success", False))

    def _extract_passage(self, body: Dict[str, Any], path: str) -> Passage:
        raw = body.get(self.PASSAGE_KEY)
        if raw is None:
            raw = body.get(self.LEGACY_PASSAGE_KEY)
        if raw is None:
            raise TransportError(f"Response from {path} did not include an annotated passage")
        try:
            return Passage.from_payload(raw)
        except ValueError as e:
            raise TransportError(f"Malformed passage in response from {path}: {e}") from e
