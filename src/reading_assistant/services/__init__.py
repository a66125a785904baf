"""Services layer - business logic and backend integrations."""

from reading_assistant.services.account_service import AccountService
from reading_assistant.services.passage_service import PassageService
from reading_assistant.services.settings_manager import SettingsManager

# Text processing services
from reading_assistant.services.text_processing import (
    AnnotationRenderer,
    RenderedParagraph,
    RenderedToken,
    TokenState,
    needs_space_after,
)

# Async execution
from reading_assistant.services.api_workers import ApiCallWorker, TaskRunner, ThreadPoolTaskRunner, WorkerSignals

__all__ = [
    "AccountService",
    "PassageService",
    "SettingsManager",
    "AnnotationRenderer",
    "RenderedParagraph",
    "RenderedToken",
    "TokenState",
    "needs_space_after",
    "ApiCallWorker",
    "TaskRunner",
    "ThreadPoolTaskRunner",
    "WorkerSignals",
]
