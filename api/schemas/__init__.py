"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import ChatRequest, GenerationRequest
    from api.schemas.profile_schemas import ProfileResponse
"""

from api.schemas.chat_schemas import ChatMessage, ChatRequest
from api.schemas.generation_schemas import (
    ErrorResponse,
    GenerationRequest,
    QuizQuestion,
    QuizResponse,
    RoadmapResponse,
    RoadmapStep,
)
from api.schemas.profile_schemas import AcademicLevel, ProfileResponse, UpdateProfileRequest

__all__ = [
    # chat
    "ChatMessage",
    "ChatRequest",
    # generation
    "ErrorResponse",
    "GenerationRequest",
    "QuizQuestion",
    "QuizResponse",
    "RoadmapResponse",
    "RoadmapStep",
    # profile
    "AcademicLevel",
    "ProfileResponse",
    "UpdateProfileRequest",
]
