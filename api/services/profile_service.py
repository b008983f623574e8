"""
Profile row store: select and update one learner profile by user id.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session as DBSession

from api.models.models import Profile
from api.schemas.profile_schemas import ProfileResponse, UpdateProfileRequest
from api.utils.common import iso_format

PROFILE_FIELDS = ("display_name", "bio", "academic_level", "avatar_url")


class ProfileService:
    def __init__(self, db: DBSession):
        self.db = db

    def get(self, user_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Profile for user_id; an empty profile when no row exists yet."""
        profile = self.get(user_id)
        if profile is None:
            return ProfileResponse(user_id=user_id)
        return to_response(profile)

    def update_profile(self, user_id: str, body: UpdateProfileRequest) -> ProfileResponse:
        """Apply the fields present in body (empty string -> NULL). Creates the row if missing."""
        profile = self.get(user_id)
        if profile is None:
            profile = Profile(user_id=user_id)
            self.db.add(profile)
        for field, value in body.model_dump(exclude_unset=True).items():
            if hasattr(value, "value"):
                value = value.value
            setattr(profile, field, value or None)
        profile.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(profile)
        return to_response(profile)


def to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        user_id=profile.user_id,
        **{field: getattr(profile, field) for field in PROFILE_FIELDS},
        updated_at=iso_format(profile.updated_at) if profile.updated_at else None,
    )
