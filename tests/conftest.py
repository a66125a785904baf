"""Shared fixtures: synchronous task runners and sample passages."""

from typing import Any, Callable, List, Tuple

import pytest

from reading_assistant.core import Passage, User
from reading_assistant.services import TaskRunner


class ImmediateTaskRunner(TaskRunner):
    """Runs each call inline, delivering the result before submit() returns."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, on_result, on_error) -> None:
        self.submitted += 1
        try:
            value = fn()
        except Exception as e:
            on_error(e)
            return
        on_result(value)


class DeferredTaskRunner(TaskRunner):
    """Queues calls so tests control when (and in which order) they complete."""

    def __init__(self):
        self.pending: List[Tuple[Callable[[], Any], Callable, Callable]] = []

    def submit(self, fn, on_result, on_error) -> None:
        self.pending.append((fn, on_result, on_error))

    def run(self, index: int = 0) -> None:
        fn, on_result, on_error = self.pending.pop(index)
        try:
            value = fn()
        except Exception as e:
            on_error(e)
            return
        on_result(value)

    def run_all(self) -> None:
        while self.pending:
            self.run(0)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def immediate_runner():
    return ImmediateTaskRunner()


@pytest.fixture
def deferred_runner():
    return DeferredTaskRunner()


@pytest.fixture
def sample_passage():
    """Two paragraphs; 'latency' explained, 'throughput' not."""
    return Passage.from_payload(
        [
            [
                {"word": "Lower"},
                {"word": "latency", "explanation": "Delay before a transfer begins."},
                {"word": "improves"},
                {"word": "throughput"},
                {"word": "."},
            ],
            [
                {"word": "See"},
                {"word": "("},
                {"word": "Note"},
                {"word": ")"},
                {"word": "."},
            ],
        ]
    )


@pytest.fixture
def sample_user():
    return User.from_payload(
        {
            "id": 7,
            "username": "ada",
            "email": "ada@example.com",
            "bio": "Engineer",
            "known_keywords": ["API", "cache"],
            "all_keyword_explanation_pairs": [
                {"keyword": "latency", "explanation": "Delay before a transfer begins."},
            ],
        }
    )
