"""Learner session: state, chat turns, quiz attempts and roadmap refresh."""

from mentor.session.chat import ChatTurn
from mentor.session.quiz import QuizAttempt, start_quiz
from mentor.session.roadmap import refresh_roadmap
from mentor.session.state import MentorSession

__all__ = [
    "ChatTurn",
    "MentorSession",
    "QuizAttempt",
    "refresh_roadmap",
    "start_quiz",
]
