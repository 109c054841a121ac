"""Errors raised by record store and auth clients."""
from typing import Optional

import httpx


class RecordStoreError(Exception):
    """A record store call failed; the caller may retry."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthorizationError(RecordStoreError):
    """The caller is unauthenticated (401) or lacks the required role (403)."""


def response_detail(response: httpx.Response) -> str:
    """Best-effort human readable error detail from an API response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("error")
        if detail:
            return str(detail)
    return response.reason_phrase


def raise_for_store_status(response: httpx.Response, action: str) -> None:
    """Translate non-2xx responses into store errors."""
    if response.is_success:
        return
    detail = response_detail(response)
    if response.status_code in (401, 403):
        raise AuthorizationError(f"{action}: {detail}", status_code=response.status_code)
    raise RecordStoreError(f"{action}: {detail}", status_code=response.status_code)
