"""
AI mentor client library.

Example:
    from mentor import MentorClient, MentorSession, ChatTurn
"""

from mentor.client import CancelToken, DeltaFrame, MentorClient, StreamDone, consume_stream
from mentor.core.errors import MentorClientError, NoResponseBodyError, RequestFailedError, StreamTimeoutError
from mentor.models import ChatMessage, Interest, Level, QuizResult, RoadmapMilestone
from mentor.session import ChatTurn, MentorSession, QuizAttempt, refresh_roadmap, start_quiz
from mentor.speech import SpeechRecognizer, VoiceInput

__all__ = [
    "CancelToken",
    "DeltaFrame",
    "MentorClient",
    "StreamDone",
    "consume_stream",
    "MentorClientError",
    "NoResponseBodyError",
    "RequestFailedError",
    "StreamTimeoutError",
    "ChatMessage",
    "Interest",
    "Level",
    "QuizResult",
    "RoadmapMilestone",
    "ChatTurn",
    "MentorSession",
    "QuizAttempt",
    "refresh_roadmap",
    "start_quiz",
    "SpeechRecognizer",
    "VoiceInput",
]
