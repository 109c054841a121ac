"""Repository for role assignments."""
from typing import Any, Dict, List

from reading_tracker.database import get_db_connection


class UserRoleRepository:
    """Repository for role assignments."""

    @staticmethod
    def has_role(user_id: int, role: str) -> bool:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT 1 FROM user_roles WHERE user_id = %s AND role = %s LIMIT 1",
                    (user_id, role),
                )
                return cur.fetchone() is not None

    @staticmethod
    def list_all() -> List[Dict[str, Any]]:
        with get_db_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT id, user_id, role FROM user_roles ORDER BY user_id ASC, role ASC")
                rows = cur.fetchall()
        return [dict(row) for row in rows]
