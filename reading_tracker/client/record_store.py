"""Record store contract and its HTTP implementation."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Protocol

import httpx

from reading_tracker.client.auth_provider import AuthProvider
from reading_tracker.client.errors import AuthorizationError, RecordStoreError, raise_for_store_status

logger = logging.getLogger(__name__)

_FILENAME_PATTERN = re.compile(r'filename="?([^";]+)"?')


@dataclass(frozen=True)
class ExportReport:
    filename: str
    content: str


class RecordStore(Protocol):
    """Remote storage for progress rows and profiles.

    ``upsert_progress`` and ``delete_progress`` are idempotent per
    ``(user_id, day)``. Every method raises ``RecordStoreError`` on failure.
    """

    async def fetch_progress(self, user_id: Any) -> List[Dict[str, Any]]:
        ...

    async def upsert_progress(self, user_id: Any, day: int, completed_at: datetime) -> Dict[str, Any]:
        ...

    async def delete_progress(self, user_id: Any, day: int) -> None:
        ...

    async def fetch_profiles(self) -> List[Dict[str, Any]]:
        ...

    async def update_approval_status(self, user_id: Any, status: str) -> Dict[str, Any]:
        ...

    async def admin_progress_summary(self) -> List[Dict[str, Any]]:
        ...

    async def remove_user(self, user_id: Any) -> None:
        ...

    async def export_report(self) -> ExportReport:
        ...


class HttpRecordStore:
    """``RecordStore`` backed by the Reading Tracker API."""

    def __init__(self, client: httpx.AsyncClient, auth: AuthProvider):
        self._client = client
        self._auth = auth

    def _auth_headers(self) -> Dict[str, str]:
        session = self._auth.current_session()
        if session is None or not session.access_token:
            raise AuthorizationError("Not authenticated", status_code=401)
        return {"Authorization": f"Bearer {session.access_token}"}

    async def _request(self, method: str, url: str, action: str, **kwargs) -> httpx.Response:
        headers = self._auth_headers()
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{action}: transport error {e!r}")
            raise RecordStoreError(f"{action}: {e}") from e
        raise_for_store_status(response, action)
        return response

    @staticmethod
    def _json(response: httpx.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{action}: response was not JSON")
            raise RecordStoreError(f"{action}: invalid response body", status_code=response.status_code) from e

    async def fetch_progress(self, user_id: Any) -> List[Dict[str, Any]]:
        response = await self._request("GET", f"/api/users/{user_id}/progress", "Failed to load reading progress")
        return self._json(response, "Failed to load reading progress")

    async def upsert_progress(self, user_id: Any, day: int, completed_at: datetime) -> Dict[str, Any]:
        response = await self._request(
            "PUT",
            f"/api/users/{user_id}/progress/{day}",
            "Failed to mark complete",
            json={"completed_at": completed_at.isoformat()},
        )
        return self._json(response, "Failed to mark complete")

    async def delete_progress(self, user_id: Any, day: int) -> None:
        await self._request("DELETE", f"/api/users/{user_id}/progress/{day}", "Failed to undo")

    async def fetch_profiles(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/api/admin/profiles", "Failed to load users")
        return self._json(response, "Failed to load users")

    async def update_approval_status(self, user_id: Any, status: str) -> Dict[str, Any]:
        response = await self._request(
            "PATCH",
            f"/api/admin/profiles/{user_id}/approval",
            "Failed to update approval status",
            json={"approval_status": status},
        )
        return self._json(response, "Failed to update approval status")

    async def admin_progress_summary(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/api/admin/progress-summary", "Failed to load progress summary")
        payload = self._json(response, "Failed to load progress summary")
        if not isinstance(payload, dict) or "members" not in payload:
            raise RecordStoreError("Failed to load progress summary: invalid response body", status_code=response.status_code)
        return payload["members"]

    async def remove_user(self, user_id: Any) -> None:
        await self._request("DELETE", f"/api/admin/users/{user_id}", "Failed to remove user")

    async def export_report(self) -> ExportReport:
        response = await self._request("POST", "/api/admin/export", "Export failed")
        match = _FILENAME_PATTERN.search(response.headers.get("content-disposition", ""))
        filename = match.group(1) if match else f"reading_tracker_export_{date.today().isoformat()}.csv"
        return ExportReport(filename=filename, content=response.text)
