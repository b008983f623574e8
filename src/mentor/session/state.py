"""
Session-scoped learner state: subject, per-subject chat history, quiz results,
roadmap and explored topics. One instance per learner session, passed by
reference to whatever renders it; the methods below are the only writers.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping, Optional, Union

from mentor.core.errors import SessionStateError
from mentor.models import (
    ChatMessage,
    Interest,
    Level,
    ProgressSummary,
    QuizResult,
    RoadmapMilestone,
    RoadmapStep,
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percent(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole else 0.0


class MentorSession:
    def __init__(self, interest: Optional[Union[Interest, str]] = None, level: Optional[Union[Level, str]] = None):
        self.interest: Optional[Interest] = Interest(interest) if interest is not None else None
        self.level: Optional[Level] = Level(level) if level is not None else None
        self.chats_by_domain: dict[str, list[ChatMessage]] = {}
        self.quiz_results: list[QuizResult] = []
        self.roadmap: list[RoadmapMilestone] = []
        self.topics_explored: list[str] = []

    # ---- subject ----

    def select_subject(self, interest: Union[Interest, str], level: Union[Level, str]) -> None:
        self.interest = Interest(interest)
        self.level = Level(level)

    def require_subject(self) -> tuple[Interest, Level]:
        if self.interest is None or self.level is None:
            raise SessionStateError("Choose a subject and level first")
        return self.interest, self.level

    @property
    def domain_key(self) -> str:
        return self.interest.value if self.interest is not None else ""

    # ---- chat ----

    @property
    def chat_messages(self) -> list[ChatMessage]:
        """Copy of the current subject's conversation."""
        return list(self.chats_by_domain.get(self.domain_key, []))

    def _history(self, domain: Optional[str]) -> list[ChatMessage]:
        return self.chats_by_domain.setdefault(self.domain_key if domain is None else domain, [])

    def append_message(
        self,
        message: Union[ChatMessage, Mapping[str, str]],
        *,
        domain: Optional[str] = None,
    ) -> ChatMessage:
        """Append to ``domain``'s history (the current subject when omitted)."""
        msg = message if isinstance(message, ChatMessage) else ChatMessage.model_validate(message)
        self._history(domain).append(msg)
        return msg

    def append_assistant_delta(self, chunk: str, *, domain: Optional[str] = None) -> ChatMessage:
        """
        Extend the trailing assistant message with ``chunk``, or start one. A
        streamed reply passes the domain it was sent from, so switching subject
        mid-stream does not move the rest of the reply.
        """
        history = self._history(domain)
        if history and history[-1].role == "assistant":
            history[-1] = history[-1].model_copy(update={"content": history[-1].content + chunk})
        else:
            history.append(ChatMessage(role="assistant", content=chunk))
        return history[-1]

    # ---- quiz ----

    def add_quiz_result(self, result: QuizResult) -> None:
        self.quiz_results.append(result)

    # ---- roadmap ----

    def set_roadmap(self, steps: Iterable[Union[RoadmapStep, Mapping]]) -> list[RoadmapMilestone]:
        """Replace the roadmap; every milestone starts incomplete."""
        milestones = []
        for step in steps:
            data = step.model_dump() if isinstance(step, RoadmapStep) else dict(step)
            data["completed"] = False
            milestones.append(RoadmapMilestone.model_validate(data))
        self.roadmap = milestones
        return list(self.roadmap)

    def toggle_milestone(self, index: int) -> RoadmapMilestone:
        """Flip one milestone. An index outside the roadmap raises IndexError instead of being ignored."""
        if not 0 <= index < len(self.roadmap):
            raise IndexError(f"milestone index out of range: {index}")
        milestone = self.roadmap[index]
        self.roadmap[index] = milestone.model_copy(update={"completed": not milestone.completed})
        return self.roadmap[index]

    @property
    def completed_milestones(self) -> int:
        return sum(1 for m in self.roadmap if m.completed)

    # ---- topics ----

    def add_topic(self, topic: str) -> None:
        if topic not in self.topics_explored:
            self.topics_explored.append(topic)

    # ---- progress ----

    def progress(self) -> ProgressSummary:
        scores = [_percent(r.score, r.total) for r in self.quiz_results]
        average = _round_half_up(sum(scores) / len(scores)) if scores else 0
        completed = self.completed_milestones
        return ProgressSummary(
            quizzes_taken=len(self.quiz_results),
            average_accuracy=average,
            topics_explored=len(self.topics_explored),
            roadmap_progress=_round_half_up(_percent(completed, len(self.roadmap))),
            quiz_scores=[_round_half_up(s) for s in scores],
        )
