"""Shared fixtures for client tests."""
import asyncio
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from reading_tracker.client.auth_provider import AuthSession, StaticAuthProvider
from reading_tracker.client.errors import RecordStoreError
from reading_tracker.client.notifications import NotificationCenter
from reading_tracker.client.record_store import ExportReport


class FakeRecordStore:
    """In-memory record store keyed by (user_id, day).

    ``fail(method, error)`` makes the next call to ``method`` raise.
    ``hold(method)`` returns an event the next call to ``method`` waits on
    after it has read its data, so tests can interleave calls.
    """

    def __init__(self):
        self.rows: Dict[tuple, Dict[str, Any]] = {}
        self.profiles: List[Dict[str, Any]] = []
        self.summary: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self._failures: Dict[str, List[Exception]] = {}
        self._gates: Dict[str, List[asyncio.Event]] = {}

    def seed(self, user_id: Any, *days: int) -> None:
        for day in days:
            self.rows[(user_id, day)] = {
                "user_id": user_id,
                "day": day,
                "completed_at": datetime(2025, 1, 1, tzinfo=timezone.utc).isoformat(),
            }

    def fail(self, method: str, error: Optional[Exception] = None) -> None:
        self._failures.setdefault(method, []).append(error or RecordStoreError("store unavailable", status_code=503))

    def hold(self, method: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates.setdefault(method, []).append(gate)
        return gate

    def count(self, method: str) -> int:
        return self.calls.count(method)

    async def _enter(self, method: str) -> None:
        self.calls.append(method)
        gates = self._gates.get(method)
        if gates:
            await gates.pop(0).wait()
        failures = self._failures.get(method)
        if failures:
            raise failures.pop(0)

    async def fetch_progress(self, user_id):
        snapshot = [dict(row) for (uid, _), row in sorted(self.rows.items()) if uid == user_id]
        await self._enter("fetch_progress")
        return snapshot

    async def upsert_progress(self, user_id, day, completed_at):
        await self._enter("upsert_progress")
        row = {"user_id": user_id, "day": day, "completed_at": completed_at.isoformat()}
        self.rows[(user_id, day)] = row
        return row

    async def delete_progress(self, user_id, day):
        await self._enter("delete_progress")
        self.rows.pop((user_id, day), None)

    async def fetch_profiles(self):
        await self._enter("fetch_profiles")
        return [dict(p) for p in self.profiles]

    async def update_approval_status(self, user_id, status):
        await self._enter("update_approval_status")
        for profile in self.profiles:
            if profile["user_id"] == user_id:
                profile["approval_status"] = status
                return dict(profile)
        raise RecordStoreError("Profile not found", status_code=404)

    async def admin_progress_summary(self):
        await self._enter("admin_progress_summary")
        return [dict(row) for row in self.summary]

    async def remove_user(self, user_id):
        await self._enter("remove_user")
        for key in [key for key in self.rows if key[0] == user_id]:
            del self.rows[key]
        for profile in self.profiles:
            if profile["user_id"] == user_id:
                profile["approval_status"] = "rejected"

    async def export_report(self):
        await self._enter("export_report")
        return ExportReport(filename="reading_tracker_export_2025-02-19.csv", content="=== PROFILES ===")


def make_session(user_id=1, approval_status="approved", is_admin=False):
    return AuthSession(
        user_id=user_id,
        email=f"member{user_id}@example.com",
        access_token="token-123",
        full_name="Member",
        approval_status=approval_status,
        is_admin=is_admin,
    )


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def auth():
    return StaticAuthProvider(make_session())


@pytest.fixture
def notifications():
    return NotificationCenter()


@pytest.fixture
def feb_19():
    """Clock pinned to plan day 50 with the default January 1 start."""
    return lambda: date(2025, 2, 19)


@pytest.fixture
def session_factory():
    return make_session
