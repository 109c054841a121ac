"""Routes for a member's own profile."""
from fastapi import APIRouter, Depends

from reading_tracker.auth import get_current_user_dependency
from reading_tracker.models.schemas import PhoneUpdate, Profile
from reading_tracker.services.profile_service import ProfileService, get_profile_service

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=Profile)
async def get_own_profile(
    current_user=Depends(get_current_user_dependency),
    service: ProfileService = Depends(get_profile_service),
):
    return service.get_profile(current_user["id"])


@router.patch("/phone", response_model=Profile)
async def update_own_phone(
    payload: PhoneUpdate,
    current_user=Depends(get_current_user_dependency),
    service: ProfileService = Depends(get_profile_service),
):
    return service.update_phone(user_id=current_user["id"], phone=payload.phone)
