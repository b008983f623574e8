"""
Learner profile endpoints. The user id comes from the external identity provider.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.schemas.profile_schemas import ProfileResponse, UpdateProfileRequest
from api.services.profile_service import ProfileService

profile_routes = APIRouter()


@profile_routes.get("/profiles/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Select the profile row; an empty profile if none was saved yet."""
    return ProfileService(db).get_profile(user_id)


@profile_routes.patch("/profiles/{user_id}", response_model=ProfileResponse)
async def update_profile(
    user_id: str,
    body: UpdateProfileRequest,
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Update the given fields. Empty strings clear a field."""
    return ProfileService(db).update_profile(user_id, body)
