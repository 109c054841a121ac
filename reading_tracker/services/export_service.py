"""Flattened multi-section CSV export of the whole store."""
from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from reading_tracker.config import get_settings
from reading_tracker.repositories import ProfileRepository, ReadingProgressRepository, UserRoleRepository

PROFILE_COLUMNS = (
    "id", "user_id", "full_name", "email", "phone",
    "approval_status", "created_at", "updated_at",
)
PROGRESS_COLUMNS = ("id", "user_id", "day", "completed_at")
ROLE_COLUMNS = ("id", "user_id", "role")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows: Iterable[Dict[str, Any]], columns: Sequence[str]) -> str:
    """Render rows as CSV with a header line; missing keys become empty cells."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([_cell(row.get(column)) for column in columns])
    return buffer.getvalue().rstrip("\n")


class ExportService:
    """Builds the admin export report."""

    def build_report(self) -> str:
        sections: List[str] = [
            "=== PROFILES ===\n" + rows_to_csv(ProfileRepository.list_all(), PROFILE_COLUMNS),
            "=== READING_PROGRESS ===\n" + rows_to_csv(ReadingProgressRepository.list_all(), PROGRESS_COLUMNS),
            "=== USER_ROLES ===\n" + rows_to_csv(UserRoleRepository.list_all(), ROLE_COLUMNS),
        ]
        return "\n\n".join(sections)

    @staticmethod
    def filename(today: Optional[date] = None) -> str:
        prefix = get_settings().export_filename_prefix
        return f"{prefix}_{(today or date.today()).isoformat()}.csv"


def get_export_service() -> ExportService:
    return ExportService()
