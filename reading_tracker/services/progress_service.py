"""Business logic for per-user reading progress."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from reading_tracker.repositories import ReadingProgressRepository
from reading_tracker.utils.exceptions import ValidationError
from reading_tracker.utils.plan_calendar import PLAN_LENGTH_DAYS


class ReadingProgressService:
    """Reads and writes completion markers for one member at a time."""

    def __init__(self, plan_length_days: int = PLAN_LENGTH_DAYS):
        self.plan_length_days = plan_length_days

    def list_progress(self, user_id: int) -> List[Dict[str, Any]]:
        rows = ReadingProgressRepository.list_days(user_id)
        return [self._serialize(row) for row in rows]

    def mark_day(self, *, user_id: int, day: int, completed_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Record ``day`` as complete; repeating the call keeps a single row."""
        self._validate_day(day)
        row = ReadingProgressRepository.upsert_day(user_id, day, completed_at)
        return self._serialize(row)

    def unmark_day(self, *, user_id: int, day: int) -> bool:
        """Remove the completion marker; absent rows are not an error."""
        self._validate_day(day)
        return ReadingProgressRepository.delete_day(user_id, day)

    def _validate_day(self, day: int) -> None:
        if day < 1 or day > self.plan_length_days:
            raise ValidationError(f"day must be between 1 and {self.plan_length_days}")

    @staticmethod
    def _serialize(row: Dict[str, Any]) -> Dict[str, Any]:
        completed_at = row.get("completed_at")
        return {
            "user_id": row["user_id"],
            "day": int(row["day"]),
            "completed_at": completed_at.isoformat() if completed_at else None,
        }


def get_reading_progress_service() -> ReadingProgressService:
    return ReadingProgressService()
