"""Repository for per-user reading progress rows."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from reading_tracker.database import get_db_connection


class ReadingProgressRepository:
    """Repository for per-user reading progress rows.

    A row's presence means the day is complete; ``(user_id, day)`` is unique.
    """

    @staticmethod
    def list_days(user_id: int) -> List[Dict[str, Any]]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT user_id, day, completed_at
                    FROM reading_progress
                    WHERE user_id = %s
                    ORDER BY day ASC
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()
        return [dict(row) for row in rows]

    @staticmethod
    def upsert_day(user_id: int, day: int, completed_at: Optional[datetime] = None) -> Dict[str, Any]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO reading_progress (user_id, day, completed_at)
                    VALUES (%s, %s, COALESCE(%s, CURRENT_TIMESTAMP))
                    ON CONFLICT (user_id, day)
                    DO UPDATE SET completed_at = EXCLUDED.completed_at
                    RETURNING user_id, day, completed_at
                    """,
                    (user_id, day, completed_at),
                )
                row = cur.fetchone()
                conn.commit()
        return dict(row)

    @staticmethod
    def delete_day(user_id: int, day: int) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    DELETE FROM reading_progress
                    WHERE user_id = %s AND day = %s
                    RETURNING id
                    """,
                    (user_id, day),
                )
                deleted = cur.fetchone() is not None
                conn.commit()
        return deleted

    @staticmethod
    def list_all() -> List[Dict[str, Any]]:
        """All progress rows, newest first (export)."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT id, user_id, day, completed_at
                    FROM reading_progress
                    ORDER BY completed_at DESC
                    """
                )
                rows = cur.fetchall()
        return [dict(row) for row in rows]

    @staticmethod
    def get_progress_summary() -> List[Dict[str, Any]]:
        """Distinct-day completion counts for approved members."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT user_id, full_name, email, completed, percent
                    FROM reading_progress_summary
                    ORDER BY completed DESC, full_name ASC
                    """
                )
                rows = cur.fetchall()
        return [
            {
                **dict(row),
                "completed": int(row["completed"] or 0),
                "percent": float(row["percent"] or 0),
            }
            for row in rows
        ]
