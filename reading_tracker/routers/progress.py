"""Routes for a member's own reading progress."""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response, status

from reading_tracker.auth import get_current_approved_user
from reading_tracker.models.schemas import ProgressRecord, ProgressUpsert
from reading_tracker.services.progress_service import (
    ReadingProgressService,
    get_reading_progress_service,
)

router = APIRouter(prefix="/api/users/{user_id}/progress", tags=["reading-progress"])


def _require_owner(current_user: dict, user_id: int) -> None:
    if current_user["id"] != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot access another member's progress")


@router.get("", response_model=List[ProgressRecord])
async def list_progress(
    user_id: int = Path(..., ge=1),
    current_user=Depends(get_current_approved_user),
    service: ReadingProgressService = Depends(get_reading_progress_service),
):
    _require_owner(current_user, user_id)
    return service.list_progress(user_id)


@router.put("/{day}", response_model=ProgressRecord)
async def mark_day_complete(
    user_id: int = Path(..., ge=1),
    day: int = Path(..., ge=1),
    payload: Optional[ProgressUpsert] = Body(default=None),
    current_user=Depends(get_current_approved_user),
    service: ReadingProgressService = Depends(get_reading_progress_service),
):
    _require_owner(current_user, user_id)
    completed_at = payload.completed_at if payload else None
    return service.mark_day(user_id=user_id, day=day, completed_at=completed_at)


@router.delete("/{day}", status_code=204)
async def mark_day_incomplete(
    user_id: int = Path(..., ge=1),
    day: int = Path(..., ge=1),
    current_user=Depends(get_current_approved_user),
    service: ReadingProgressService = Depends(get_reading_progress_service),
):
    _require_owner(current_user, user_id)
    service.unmark_day(user_id=user_id, day=day)
    return Response(status_code=204)
