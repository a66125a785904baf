"""Unit tests for WordToken, Passage and SavedPassage."""

import pytest

from reading_assistant.core import Passage, SavedPassage, WordToken


class TestWordTokenFromPayload:
    def test_explained_token(self):
        token = WordToken.from_payload({"word": "cache", "explanation": "Fast storage layer."})

        assert token.word == "cache"
        assert token.is_explained
        assert not token.is_malformed

    def test_empty_explanation_counts_as_unexplained(self):
        token = WordToken.from_payload({"word": "cache", "explanation": ""})

        assert token.explanation is None
        assert not token.is_explained

    def test_missing_word_is_malformed(self):
        token = WordToken.from_payload({"explanation": "orphan"})

        assert token.is_malformed
        assert token.word == ""

    def test_non_object_is_malformed(self):
        token = WordToken.from_payload("cache")

        assert token.is_malformed
        assert not token.is_explained

    def test_to_payload_omits_missing_explanation(self):
        assert WordToken("cache").to_payload() == {"word": "cache"}
        assert WordToken("cache", "x").to_payload() == {"word": "cache", "explanation": "x"}


class TestPassage:
    def test_from_payload_rejects_non_list(self):
        with pytest.raises(ValueError):
            Passage.from_payload({"word": "x"})

    def test_non_list_paragraph_becomes_empty(self):
        passage = Passage.from_payload([[{"word": "a"}], "broken"])

        assert passage.shape() == (1, 0)

    def test_is_empty(self):
        assert Passage.from_payload([]).is_empty
        assert Passage.from_payload([[], []]).is_empty
        assert not Passage.from_payload([[{"word": "a"}]]).is_empty

    def test_tokens_in_order(self, sample_passage):
        words = [token.word for token in sample_passage.tokens()]

        assert words[:4] == ["Lower", "latency", "improves", "throughput"]

    def test_has_unexplained_uses_exact_match(self, sample_passage):
        assert sample_passage.has_unexplained("throughput")
        assert not sample_passage.has_unexplained("Throughput")
        assert not sample_passage.has_unexplained("latency")

    def test_has_explained(self, sample_passage):
        assert sample_passage.has_explained("latency")
        assert not sample_passage.has_explained("throughput")

    def test_payload_keeps_shape(self, sample_passage):
        rebuilt = Passage.from_payload(sample_passage.to_payload())

        assert rebuilt == sample_passage
        assert rebuilt.shape() == (5, 5)

    def test_malformed_entries_are_sent_back_unchanged(self):
        raw = [[{"word": "cache"}, {"explanation": "orphan"}, "stray", {"word": 5}]]

        passage = Passage.from_payload(raw)

        assert passage.to_payload() == raw


class TestSavedPassage:
    def test_from_payload(self):
        saved = SavedPassage.from_payload(
            {"id": 3, "split_result_with_explanations": [[{"word": "cache", "explanation": "x"}]]}
        )

        assert saved.id == 3
        assert saved.passage.has_explained("cache")

    def test_missing_id_raises(self):
        with pytest.raises(ValueError):
            SavedPassage.from_payload({"split_result_with_explanations": []})
