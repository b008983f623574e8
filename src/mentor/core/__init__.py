from mentor.core.errors import (
    GENERIC_ERROR,
    MentorClientError,
    NoResponseBodyError,
    QuizStateError,
    RequestFailedError,
    SessionStateError,
    StreamTimeoutError,
)
from mentor.core.prompt_builder import bucket_label, build_from_template

__all__ = [
    "GENERIC_ERROR",
    "MentorClientError",
    "NoResponseBodyError",
    "QuizStateError",
    "RequestFailedError",
    "SessionStateError",
    "StreamTimeoutError",
    "bucket_label",
    "build_from_template",
]
