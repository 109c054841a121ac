"""Admin console: approvals, aggregate progress and export."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from reading_tracker.client.errors import AuthorizationError, RecordStoreError
from reading_tracker.client.notifications import NotificationCenter
from reading_tracker.client.record_store import ExportReport, RecordStore

logger = logging.getLogger(__name__)


class AdminConsole:
    """Loads and acts on the admin views.

    Authorization failures propagate as ``AuthorizationError`` so callers can
    tell "not allowed" apart from a transient failure, which only produces a
    notification.
    """

    def __init__(self, store: RecordStore, notifications: Optional[NotificationCenter] = None):
        self._store = store
        self.notifications = notifications or NotificationCenter()
        self.profiles: List[Dict[str, Any]] = []
        self.progress: List[Dict[str, Any]] = []
        self.is_loading = False

    @property
    def pending_profiles(self) -> List[Dict[str, Any]]:
        return [p for p in self.profiles if p.get("approval_status") == "pending"]

    async def load_all(self) -> None:
        self.is_loading = True
        try:
            await asyncio.gather(self._load_profiles(), self._load_progress())
        finally:
            self.is_loading = False

    async def _load_profiles(self) -> None:
        try:
            self.profiles = await self._store.fetch_profiles()
        except AuthorizationError:
            raise
        except RecordStoreError as e:
            logger.error(f"Load profiles error: {e}")
            self.notifications.error("Failed to load users", str(e))

    async def _load_progress(self) -> None:
        try:
            rows = await self._store.admin_progress_summary()
        except AuthorizationError:
            raise
        except RecordStoreError as e:
            logger.error(f"Load progress summary error: {e}")
            self.notifications.error("Failed to load progress", str(e))
            return
        self.progress = sorted(rows, key=lambda row: row["completed"], reverse=True)

    async def _set_status(self, user_id: Any, status: str, title: str) -> bool:
        try:
            await self._store.update_approval_status(user_id, status)
        except AuthorizationError:
            raise
        except RecordStoreError as e:
            logger.error(f"Update approval status error for {user_id}: {e}")
            self.notifications.error("Failed to update user", str(e))
            return False
        self.notifications.notify(title)
        await self.load_all()
        return True

    async def approve(self, user_id: Any) -> bool:
        return await self._set_status(user_id, "approved", "User approved")

    async def reject(self, user_id: Any) -> bool:
        return await self._set_status(user_id, "rejected", "User rejected")

    async def remove_user(self, user_id: Any) -> bool:
        """Delete the member's progress and reject their profile."""
        try:
            await self._store.remove_user(user_id)
        except AuthorizationError:
            raise
        except RecordStoreError as e:
            logger.error(f"Remove user error for {user_id}: {e}")
            self.notifications.error("Failed to remove user", str(e))
            return False
        self.notifications.notify("User removed")
        await self.load_all()
        return True

    async def export_report(self) -> Optional[ExportReport]:
        try:
            report = await self._store.export_report()
        except AuthorizationError:
            raise
        except RecordStoreError as e:
            logger.error(f"Export error: {e}")
            self.notifications.error("Export failed", str(e))
            return None
        self.notifications.notify("Export successful", report.filename)
        return report
