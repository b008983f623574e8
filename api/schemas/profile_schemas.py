"""
Learner profile schemas.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel


class AcademicLevel(str, Enum):
    ELEMENTARY_SCHOOL = "Elementary School"
    MIDDLE_SCHOOL = "Middle School"
    HIGH_SCHOOL = "High School"
    UNDERGRADUATE = "Undergraduate"
    GRADUATE = "Graduate"
    POSTGRADUATE = "Postgraduate"
    PROFESSIONAL = "Professional"


class ProfileResponse(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    academic_level: Optional[AcademicLevel] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[str] = None  # ISO of last update


class UpdateProfileRequest(BaseModel):
    """Fields left out are unchanged; empty strings clear the field."""
    display_name: Optional[str] = None
    bio: Optional[str] = None
    academic_level: Optional[Union[AcademicLevel, Literal[""]]] = None
    avatar_url: Optional[str] = None
