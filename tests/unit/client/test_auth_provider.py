"""Tests for client auth providers and sessions."""
import json

import httpx
import pytest

from reading_tracker.client.auth_provider import AuthSession, HttpAuthProvider, StaticAuthProvider
from reading_tracker.client.errors import AuthorizationError, RecordStoreError

SESSION_PAYLOAD = {
    "user": {"id": 7, "email": "reader@example.com", "is_active": True, "created_at": "2025-01-01T00:00:00Z"},
    "profile": {"user_id": 7, "full_name": "Ruth Reader", "email": "reader@example.com", "approval_status": "approved"},
    "approval_status": "approved",
    "is_approved": True,
    "is_admin": False,
}


def _provider(handler):
    client = httpx.AsyncClient(base_url="http://testserver", transport=httpx.MockTransport(handler))
    return HttpAuthProvider(client)


class TestAuthSession:

    def test_from_payload(self):
        session = AuthSession.from_payload(SESSION_PAYLOAD, access_token="abc")

        assert session.user_id == 7
        assert session.full_name == "Ruth Reader"
        assert session.access_token == "abc"
        assert session.is_approved is True
        assert session.is_pending is False

    def test_pending_session_without_profile(self):
        payload = {**SESSION_PAYLOAD, "profile": None, "approval_status": "pending"}

        session = AuthSession.from_payload(payload)

        assert session.full_name is None
        assert session.is_pending is True
        assert session.is_approved is False


class TestStaticAuthProvider:

    def test_sign_in_and_out(self, session_factory):
        provider = StaticAuthProvider()
        assert provider.current_session() is None

        provider.sign_in_as(session_factory())
        assert provider.current_session().user_id == 1

        provider.sign_out()
        assert provider.current_session() is None


class TestHttpAuthProvider:

    @pytest.mark.asyncio
    async def test_sign_in_keeps_token_and_session(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"access_token": "jwt-1", "token_type": "bearer", "session": SESSION_PAYLOAD})

        provider = _provider(handler)
        session = await provider.sign_in("reader@example.com", "SecurePass123!")

        assert session.access_token == "jwt-1"
        assert provider.current_session() is session
        assert seen[0].url.path == "/api/auth/login"
        assert json.loads(seen[0].content)["email"] == "reader@example.com"

    @pytest.mark.asyncio
    async def test_sign_in_with_bad_credentials(self):
        provider = _provider(lambda request: httpx.Response(401, json={"detail": "Incorrect email or password"}))

        with pytest.raises(AuthorizationError, match="Incorrect email or password"):
            await provider.sign_in("reader@example.com", "wrong")

        assert provider.current_session() is None

    @pytest.mark.asyncio
    async def test_sign_up_sends_optional_phone(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(201, json={"id": 7, "email": "reader@example.com"})

        provider = _provider(handler)
        await provider.sign_up(email="reader@example.com", full_name="Ruth", password="SecurePass123!")
        await provider.sign_up(email="b@example.com", full_name="Bo", password="SecurePass123!", phone="555-123-4567")

        assert "phone" not in seen[0]
        assert seen[1]["phone"] == "555-123-4567"

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email(self):
        provider = _provider(lambda request: httpx.Response(400, json={"detail": "Email already registered"}))

        with pytest.raises(RecordStoreError) as exc_info:
            await provider.sign_up(email="reader@example.com", full_name="Ruth", password="SecurePass123!")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_refresh_picks_up_approval(self):
        responses = iter([
            httpx.Response(200, json={"access_token": "jwt-1", "session": {**SESSION_PAYLOAD, "approval_status": "pending"}}),
            httpx.Response(200, json=SESSION_PAYLOAD),
        ])
        provider = _provider(lambda request: next(responses))
        await provider.sign_in("reader@example.com", "SecurePass123!")
        assert provider.current_session().is_pending

        session = await provider.refresh()

        assert session.is_approved
        assert session.access_token == "jwt-1"

    @pytest.mark.asyncio
    async def test_refresh_with_expired_token_signs_out(self):
        responses = iter([
            httpx.Response(200, json={"access_token": "jwt-1", "session": SESSION_PAYLOAD}),
            httpx.Response(401, json={"detail": "Could not validate credentials"}),
        ])
        provider = _provider(lambda request: next(responses))
        await provider.sign_in("reader@example.com", "SecurePass123!")

        assert await provider.refresh() is None
        assert provider.current_session() is None

    @pytest.mark.asyncio
    async def test_refresh_without_session(self):
        provider = _provider(lambda request: httpx.Response(500))

        assert await provider.refresh() is None
