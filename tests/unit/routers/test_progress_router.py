"""Tests for the per-member reading progress endpoints."""
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from reading_tracker.main import app
from reading_tracker.auth import get_current_approved_user, get_current_user_dependency
from reading_tracker.routers import progress
from reading_tracker.services.progress_service import ReadingProgressService
from reading_tracker.utils.exceptions import ValidationError

client = TestClient(app)


@pytest.fixture(autouse=True)
def clear_overrides():
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def approved_user():
    return {"id": 42, "email": "user@example.com", "is_active": True, "profile": {"approval_status": "approved"}}


def _mock_service() -> Mock:
    return Mock(spec=ReadingProgressService)


def _apply_common_overrides(service_mock: Mock, user: dict):
    app.dependency_overrides[get_current_approved_user] = lambda: user
    app.dependency_overrides[progress.get_reading_progress_service] = lambda: service_mock


def test_list_progress_returns_rows(approved_user):
    service_mock = _mock_service()
    service_mock.list_progress.return_value = [
        {"user_id": 42, "day": 1, "completed_at": "2025-01-01T08:00:00+00:00"},
        {"user_id": 42, "day": 3, "completed_at": "2025-01-03T08:00:00+00:00"},
    ]
    _apply_common_overrides(service_mock, approved_user)

    response = client.get("/api/users/42/progress")

    assert response.status_code == 200
    assert [row["day"] for row in response.json()] == [1, 3]
    service_mock.list_progress.assert_called_once_with(42)


def test_list_progress_of_another_member_is_forbidden(approved_user):
    service_mock = _mock_service()
    _apply_common_overrides(service_mock, approved_user)

    response = client.get("/api/users/7/progress")

    assert response.status_code == 403
    service_mock.list_progress.assert_not_called()


def test_mark_day_complete_without_body(approved_user):
    service_mock = _mock_service()
    service_mock.mark_day.return_value = {
        "user_id": 42, "day": 5, "completed_at": "2025-01-05T08:00:00+00:00",
    }
    _apply_common_overrides(service_mock, approved_user)

    response = client.put("/api/users/42/progress/5")

    assert response.status_code == 200
    assert response.json()["day"] == 5
    service_mock.mark_day.assert_called_once_with(user_id=42, day=5, completed_at=None)


def test_mark_day_complete_with_timestamp(approved_user):
    service_mock = _mock_service()
    service_mock.mark_day.return_value = {
        "user_id": 42, "day": 5, "completed_at": "2025-01-05T08:00:00+00:00",
    }
    _apply_common_overrides(service_mock, approved_user)

    response = client.put("/api/users/42/progress/5", json={"completed_at": "2025-01-05T08:00:00+00:00"})

    assert response.status_code == 200
    assert service_mock.mark_day.call_args.kwargs["completed_at"].day == 5


def test_mark_day_out_of_range_returns_400(approved_user):
    service_mock = _mock_service()
    service_mock.mark_day.side_effect = ValidationError("day must be between 1 and 365")
    _apply_common_overrides(service_mock, approved_user)

    response = client.put("/api/users/42/progress/366")

    assert response.status_code == 400


def test_mark_day_zero_is_rejected_by_path_validation(approved_user):
    _apply_common_overrides(_mock_service(), approved_user)

    response = client.put("/api/users/42/progress/0")

    assert response.status_code == 422


def test_mark_day_incomplete_returns_204(approved_user):
    service_mock = _mock_service()
    service_mock.unmark_day.return_value = False
    _apply_common_overrides(service_mock, approved_user)

    response = client.delete("/api/users/42/progress/5")

    assert response.status_code == 204
    service_mock.unmark_day.assert_called_once_with(user_id=42, day=5)


def test_pending_member_gets_403():
    app.dependency_overrides[get_current_user_dependency] = lambda: {"id": 42, "email": "user@example.com", "is_active": True}
    with patch(
        "reading_tracker.auth.ProfileRepository.get_by_user_id",
        return_value={"user_id": 42, "approval_status": "pending"},
    ):
        response = client.get("/api/users/42/progress")

    assert response.status_code == 403
    assert response.json()["detail"] == "Account pending approval"


def test_unauthenticated_request_gets_401():
    response = client.get("/api/users/42/progress")

    assert response.status_code == 401
