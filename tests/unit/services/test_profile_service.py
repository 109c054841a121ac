"""Tests for ProfileService and phone validation."""
from unittest.mock import patch

import pytest

from reading_tracker.services.profile_service import ProfileService, normalize_phone
from reading_tracker.utils.exceptions import NotFoundError, ValidationError


class TestNormalizePhone:

    @pytest.mark.parametrize("raw, expected", [
        ("(555) 123-4567", "(555) 123-4567"),
        ("  +1 555 123 4567 ", "+1 555 123 4567"),
        ("5551234567", "5551234567"),
    ])
    def test_valid_numbers(self, raw, expected):
        assert normalize_phone(raw) == expected

    @pytest.mark.parametrize("raw", ["", "12345", "555-123-abcd", "1" * 21])
    def test_invalid_numbers(self, raw):
        with pytest.raises(ValidationError):
            normalize_phone(raw)


class TestProfileService:

    @patch("reading_tracker.services.profile_service.ProfileRepository")
    def test_get_profile(self, mock_repo):
        mock_repo.get_by_user_id.return_value = {"user_id": 1}

        assert ProfileService().get_profile(1) == {"user_id": 1}

    @patch("reading_tracker.services.profile_service.ProfileRepository")
    def test_get_profile_missing(self, mock_repo):
        mock_repo.get_by_user_id.return_value = None

        with pytest.raises(NotFoundError):
            ProfileService().get_profile(1)

    @patch("reading_tracker.services.profile_service.ProfileRepository")
    def test_update_phone_stores_trimmed_value(self, mock_repo):
        mock_repo.update_phone.return_value = {"user_id": 1, "phone": "555-123-4567"}

        ProfileService().update_phone(user_id=1, phone=" 555-123-4567 ")

        mock_repo.update_phone.assert_called_once_with(1, "555-123-4567")

    @patch("reading_tracker.services.profile_service.ProfileRepository")
    def test_update_phone_rejects_invalid(self, mock_repo):
        with pytest.raises(ValidationError):
            ProfileService().update_phone(user_id=1, phone="abc")

        mock_repo.update_phone.assert_not_called()
