"""
Client-side error taxonomy. Every message is short and safe to show to a learner.
"""

from __future__ import annotations

from typing import Optional

GENERIC_ERROR = "Request failed"


class MentorClientError(Exception):
    """Base class for failures surfaced by the mentor client."""

    default_message = GENERIC_ERROR

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class RequestFailedError(MentorClientError):
    """Non-success HTTP status, transport failure or an undecodable body."""


class NoResponseBodyError(MentorClientError):
    default_message = "No response body"


class StreamTimeoutError(MentorClientError):
    default_message = "Stream timed out"


class SessionStateError(ValueError):
    """An operation was attempted in a session state that does not allow it."""


class QuizStateError(SessionStateError):
    pass
