"""Repository modules for database operations.

All repository classes are re-exported here for convenient imports.
"""
from reading_tracker.repositories.profile import ProfileRepository
from reading_tracker.repositories.reading_progress import ReadingProgressRepository
from reading_tracker.repositories.user_role import UserRoleRepository

__all__ = [
    "ProfileRepository",
    "ReadingProgressRepository",
    "UserRoleRepository",
]
