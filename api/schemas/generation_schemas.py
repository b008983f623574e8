"""
Quiz and roadmap generation schemas. Responses are relayed verbatim from the
tool call; the models below document their shape.
"""

from pydantic import BaseModel, Field


class GenerationRequest(BaseModel):
    interest: str = Field(min_length=1)
    level: str = Field(min_length=1)


class QuizQuestion(BaseModel):
    question: str
    options: list[str]
    correct: int
    explanation: str


class QuizResponse(BaseModel):
    topic: str
    questions: list[QuizQuestion]


class RoadmapStep(BaseModel):
    title: str
    description: str
    resources: list[str]


class RoadmapResponse(BaseModel):
    roadmap: list[RoadmapStep]


class ErrorResponse(BaseModel):
    error: str
