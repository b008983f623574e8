"""
Learner-facing data model shared by the client, the session state and the quiz flow.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Interest(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    DATA_SCIENCE = "Data Science"
    MACHINE_LEARNING = "Machine Learning"
    UI_UX_DESIGN = "UI/UX Design"
    MOBILE_DEVELOPMENT = "Mobile Development"
    CYBERSECURITY = "Cybersecurity"


class Level(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ChatMessage(BaseModel):
    """One turn of a mentor conversation."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class QuizQuestion(BaseModel):
    question: str
    options: list[str]
    correct: int = Field(description="Zero-based index of the correct option")
    explanation: str = ""


class QuizPayload(BaseModel):
    """Output of the quiz generator."""

    topic: str
    questions: list[QuizQuestion]


class QuizResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic: str
    score: int
    total: int
    timestamp: int = Field(description="Epoch milliseconds when the attempt finished")


class RoadmapStep(BaseModel):
    title: str
    description: str
    resources: list[str] = Field(default_factory=list)


class RoadmapPayload(BaseModel):
    """Output of the roadmap generator."""

    roadmap: list[RoadmapStep]


class RoadmapMilestone(RoadmapStep):
    completed: bool = False


class ProgressSummary(BaseModel):
    quizzes_taken: int
    average_accuracy: int
    topics_explored: int
    roadmap_progress: int
    quiz_scores: list[int]
