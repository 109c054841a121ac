"""Business logic behind the admin console."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from reading_tracker.models.schemas import ApprovalStatus
from reading_tracker.repositories import ProfileRepository, ReadingProgressRepository
from reading_tracker.utils.exceptions import NotFoundError
from reading_tracker.utils.plan_calendar import PLAN_LENGTH_DAYS

logger = logging.getLogger(__name__)


class AdminService:
    """Member approval and aggregate progress for administrators."""

    def list_profiles(self, approval_status: Optional[ApprovalStatus] = None) -> List[Dict[str, Any]]:
        status_value = approval_status.value if approval_status else None
        return ProfileRepository.list_profiles(status_value)

    def set_approval_status(self, *, user_id: int, approval_status: ApprovalStatus) -> Dict[str, Any]:
        profile = ProfileRepository.update_approval_status(user_id, approval_status.value)
        if not profile:
            raise NotFoundError("Profile not found")
        logger.info(f"Profile {user_id} marked {approval_status.value}")
        return profile

    def progress_summary(self) -> Dict[str, Any]:
        """Per-member completion, counted as distinct days by the database view."""
        return {
            "total_days": PLAN_LENGTH_DAYS,
            "members": ReadingProgressRepository.get_progress_summary(),
        }

    def remove_member(self, *, user_id: int) -> None:
        if not ProfileRepository.remove_member(user_id):
            raise NotFoundError("Profile not found")
        logger.info(f"Removed member {user_id}: progress deleted, profile rejected")


def get_admin_service() -> AdminService:
    return AdminService()
