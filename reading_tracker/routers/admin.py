"""Admin endpoints for member approval, progress review and export."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response

from reading_tracker.auth import get_current_admin_user
from reading_tracker.models.schemas import (
    ApprovalStatus,
    ApprovalUpdate,
    Profile,
    ProgressSummaryResponse,
)
from reading_tracker.services.admin_service import AdminService, get_admin_service
from reading_tracker.services.export_service import ExportService, get_export_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/profiles", response_model=List[Profile])
async def list_profiles(
    approval_status: Optional[ApprovalStatus] = Query(None, alias="status", description="Filter by approval status"),
    current_admin: dict = Depends(get_current_admin_user),
    service: AdminService = Depends(get_admin_service),
):
    """List member profiles, newest first."""
    return service.list_profiles(approval_status)


@router.patch("/profiles/{user_id}/approval", response_model=Profile)
async def update_approval_status(
    payload: ApprovalUpdate,
    user_id: int = Path(..., ge=1),
    current_admin: dict = Depends(get_current_admin_user),
    service: AdminService = Depends(get_admin_service),
):
    """Approve or reject a member."""
    return service.set_approval_status(user_id=user_id, approval_status=payload.approval_status)


@router.get("/progress-summary", response_model=ProgressSummaryResponse)
async def get_progress_summary(
    current_admin: dict = Depends(get_current_admin_user),
    service: AdminService = Depends(get_admin_service),
):
    """Distinct completed days per approved member."""
    return service.progress_summary()


@router.delete("/users/{user_id}", status_code=204)
async def remove_member(
    user_id: int = Path(..., ge=1),
    current_admin: dict = Depends(get_current_admin_user),
    service: AdminService = Depends(get_admin_service),
):
    """Delete a member's progress and reject their profile."""
    service.remove_member(user_id=user_id)
    return Response(status_code=204)


@router.post("/export")
async def export_database(
    current_admin: dict = Depends(get_current_admin_user),
    service: ExportService = Depends(get_export_service),
):
    """Download profiles, progress rows and role assignments as one CSV report."""
    try:
        report = service.build_report()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Export failed: {e}")
        raise HTTPException(status_code=500, detail="Export failed")

    logger.info(f"Export generated for admin {current_admin['id']}")
    return Response(
        content=report,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{service.filename()}"'},
    )
