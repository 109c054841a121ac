"""Session state for the signed-in member."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from reading_tracker.client.errors import RecordStoreError, raise_for_store_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    user_id: Any
    email: str
    access_token: Optional[str] = None
    full_name: Optional[str] = None
    approval_status: Optional[str] = None
    is_admin: bool = False

    @property
    def is_approved(self) -> bool:
        return self.approval_status == "approved"

    @property
    def is_pending(self) -> bool:
        return self.approval_status == "pending"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], access_token: Optional[str] = None) -> "AuthSession":
        """Build a session from the ``SessionInfo`` JSON returned by the API."""
        user = payload["user"]
        profile = payload.get("profile") or {}
        return cls(
            user_id=user["id"],
            email=user["email"],
            access_token=access_token,
            full_name=profile.get("full_name"),
            approval_status=payload.get("approval_status"),
            is_admin=bool(payload.get("is_admin", False)),
        )


class AuthProvider(Protocol):
    def current_session(self) -> Optional[AuthSession]:
        ...


class StaticAuthProvider:
    """Holds a session handed to it; used by embedding code and tests."""

    def __init__(self, session: Optional[AuthSession] = None):
        self._session = session

    def current_session(self) -> Optional[AuthSession]:
        return self._session

    def sign_in_as(self, session: AuthSession) -> None:
        self._session = session

    def sign_out(self) -> None:
        self._session = None


class HttpAuthProvider:
    """Signs in against the API and keeps the resulting bearer token."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client
        self._session: Optional[AuthSession] = None

    def current_session(self) -> Optional[AuthSession]:
        return self._session

    async def _post(self, url: str, action: str, payload: Dict[str, Any]) -> httpx.Response:
        try:
            response = await self._client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise RecordStoreError(f"{action}: {e}") from e
        raise_for_store_status(response, action)
        return response

    async def sign_up(
        self,
        *,
        email: str,
        full_name: str,
        password: str,
        phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Register a member; the account stays pending until an admin approves it."""
        payload = {"email": email, "full_name": full_name, "password": password}
        if phone:
            payload["phone"] = phone
        response = await self._post("/api/auth/register", "Sign up failed", payload)
        return response.json()

    async def sign_in(self, email: str, password: str) -> AuthSession:
        response = await self._post(
            "/api/auth/login", "Sign in failed", {"email": email, "password": password}
        )
        body = response.json()
        self._session = AuthSession.from_payload(body["session"], access_token=body["access_token"])
        logger.info(f"Signed in as {self._session.email} ({self._session.approval_status})")
        return self._session

    async def refresh(self) -> Optional[AuthSession]:
        """Re-read approval status and roles for the current token."""
        if self._session is None or not self._session.access_token:
            return None
        token = self._session.access_token
        try:
            response = await self._client.get(
                "/api/auth/me", headers={"Authorization": f"Bearer {token}"}
            )
        except httpx.HTTPError as e:
            raise RecordStoreError(f"Session refresh failed: {e}") from e
        if response.status_code == 401:
            self._session = None
            return None
        raise_for_store_status(response, "Session refresh failed")
        self._session = AuthSession.from_payload(response.json(), access_token=token)
        return self._session

    def sign_out(self) -> None:
        self._session = None
