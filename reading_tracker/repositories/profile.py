"""Repository for member profiles and approval state."""
from typing import Any, Dict, List, Optional

from reading_tracker.database import get_db_connection


class ProfileRepository:
    """Repository for member profiles and approval state."""

    FIELDS = "user_id, full_name, email, phone, approval_status, created_at, updated_at"

    @classmethod
    def get_by_user_id(cls, user_id: int) -> Optional[Dict[str, Any]]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT {cls.FIELDS} FROM profiles WHERE user_id = %s LIMIT 1",
                    (user_id,),
                )
                row = cur.fetchone()
        return dict(row) if row else None

    @classmethod
    def list_profiles(cls, approval_status: Optional[str] = None) -> List[Dict[str, Any]]:
        query = [f"SELECT {cls.FIELDS} FROM profiles"]
        params: List[Any] = []
        if approval_status:
            query.append("WHERE approval_status = %s")
            params.append(approval_status)
        query.append("ORDER BY created_at DESC")

        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("\n".join(query), tuple(params))
                rows = cur.fetchall()
        return [dict(row) for row in rows]

    @classmethod
    def list_all(cls) -> List[Dict[str, Any]]:
        """Every profile column, newest first (export)."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT id, {cls.FIELDS} FROM profiles ORDER BY created_at DESC"
                )
                rows = cur.fetchall()
        return [dict(row) for row in rows]

    @classmethod
    def update_approval_status(cls, user_id: int, approval_status: str) -> Optional[Dict[str, Any]]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE profiles
                    SET approval_status = %s, updated_at = CURRENT_TIMESTAMP
                    WHERE user_id = %s
                    RETURNING {cls.FIELDS}
                    """,
                    (approval_status, user_id),
                )
                row = cur.fetchone()
                conn.commit()
        return dict(row) if row else None

    @classmethod
    def update_phone(cls, user_id: int, phone: str) -> Optional[Dict[str, Any]]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE profiles
                    SET phone = %s, updated_at = CURRENT_TIMESTAMP
                    WHERE user_id = %s
                    RETURNING {cls.FIELDS}
                    """,
                    (phone, user_id),
                )
                row = cur.fetchone()
                conn.commit()
        return dict(row) if row else None

    @staticmethod
    def remove_member(user_id: int) -> bool:
        """Delete a member's progress and reject the profile in one transaction."""
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM reading_progress WHERE user_id = %s",
                    (user_id,),
                )
                cur.execute(
                    """
                    UPDATE profiles
                    SET approval_status = 'rejected', updated_at = CURRENT_TIMESTAMP
                    WHERE user_id = %s
                    RETURNING user_id
                    """,
                    (user_id,),
                )
                updated = cur.fetchone() is not None
                conn.commit()
        return updated
