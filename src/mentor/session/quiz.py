"""Quiz attempt: answer each generated question once, then record a QuizResult."""

from __future__ import annotations

import time
from typing import Callable, Optional

from mentor.core.errors import QuizStateError
from mentor.models import QuizPayload, QuizQuestion, QuizResult
from mentor.session.state import MentorSession


def _now_ms() -> int:
    return int(time.time() * 1000)


class QuizAttempt:
    def __init__(
        self,
        payload: QuizPayload,
        session: Optional[MentorSession] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        if not payload.questions:
            raise QuizStateError("Quiz has no questions")
        self.topic = payload.topic
        self.questions: list[QuizQuestion] = list(payload.questions)
        self.current = 0
        self.selected: Optional[int] = None
        self.score = 0
        self.finished = False
        self.result: Optional[QuizResult] = None
        self._session = session
        self._clock = clock

    @property
    def question(self) -> QuizQuestion:
        return self.questions[self.current]

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_last(self) -> bool:
        return self.current == self.total - 1

    def answer(self, index: int) -> bool:
        """
        Select an option for the current question. Only the first selection counts;
        later calls are ignored and return False. Returns True when the answer is correct.
        """
        if self.finished:
            raise QuizStateError("Quiz already finished")
        if self.selected is not None:
            return False
        if not 0 <= index < len(self.question.options):
            raise IndexError(f"option index out of range: {index}")
        self.selected = index
        correct = index == self.question.correct
        if correct:
            self.score += 1
        return correct

    def advance(self) -> Optional[QuizResult]:
        """Move to the next question; on the last one, finish and return the result."""
        if self.finished:
            raise QuizStateError("Quiz already finished")
        if self.selected is None:
            raise QuizStateError("Answer the current question first")
        if not self.is_last:
            self.current += 1
            self.selected = None
            return None

        self.finished = True
        self.result = QuizResult(topic=self.topic, score=self.score, total=self.total, timestamp=self._clock())
        if self._session is not None:
            self._session.add_quiz_result(self.result)
        return self.result


async def start_quiz(client, session: MentorSession) -> QuizAttempt:
    """Generate a quiz for the session's subject and open an attempt bound to it."""
    interest, level = session.require_subject()
    payload = await client.generate_quiz(interest, level)
    return QuizAttempt(payload, session=session)
