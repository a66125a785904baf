"""Error taxonomy shared across the client.

Every backend or validation failure is raised as one of these types and
converted to a user-facing message at the coordinator boundary.
"""

from typing import Optional

AUTH_EXPIRED_MESSAGE = "Please log in again to continue."


class ReadingAssistantError(Exception):
    """Base class for all client errors."""


class AuthExpiredError(ReadingAssistantError):
    """The session is missing or expired (HTTP 401). Never retried."""

    def __init__(self, message: str = AUTH_EXPIRED_MESSAGE):
        super().__init__(message)


class ValidationError(ReadingAssistantError):
    """Input rejected on the client before any network call."""


class TransportError(ReadingAssistantError):
    """Network or server failure on an otherwise valid request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AlreadyExistsError(ReadingAssistantError):
    """Adding something that is already present (e.g. a known keyword)."""


class NotFoundError(ReadingAssistantError):
    """Referencing something that is not present."""


def describe_error(exc: BaseException, fallback: str) -> str:
    """Convert an exception into the message shown to the user.

    Args:
        exc: The failure raised by a service call.
        fallback: Generic, retryable message for the operation.
    """
    if isinstance(exc, AuthExpiredError):
        return AUTH_EXPIRED_MESSAGE
    if isinstance(exc, (ValidationError, AlreadyExistsError, NotFoundError)):
        return str(exc) or fallback
    return fallback
