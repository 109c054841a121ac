"""Tests for ProfileRepository."""
from datetime import datetime
from unittest.mock import patch

from reading_tracker.repositories.profile import ProfileRepository


def _profile(**overrides):
    base = {
        "user_id": 2, "full_name": "Mary", "email": "mary@example.com",
        "phone": None, "approval_status": "pending",
        "created_at": datetime(2025, 1, 2), "updated_at": None,
    }
    base.update(overrides)
    return base


class TestProfileRepository:

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_get_by_user_id(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchone.return_value = _profile()

        result = ProfileRepository.get_by_user_id(2)

        assert result["email"] == "mary@example.com"
        assert cur.execute.call_args.args[1] == (2,)

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_get_by_user_id_missing(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchone.return_value = None

        assert ProfileRepository.get_by_user_id(2) is None

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_list_profiles_filters_by_status(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchall.return_value = [_profile()]

        result = ProfileRepository.list_profiles("pending")

        assert len(result) == 1
        sql, params = cur.execute.call_args.args
        assert "WHERE approval_status = %s" in sql
        assert params == ("pending",)

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_list_profiles_unfiltered(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchall.return_value = []

        ProfileRepository.list_profiles()

        sql, params = cur.execute.call_args.args
        assert "WHERE" not in sql
        assert params == ()

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_update_approval_status(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchone.return_value = _profile(approval_status="approved")

        result = ProfileRepository.update_approval_status(2, "approved")

        assert result["approval_status"] == "approved"
        assert cur.execute.call_args.args[1] == ("approved", 2)
        conn.commit.assert_called_once()

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_update_phone(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchone.return_value = _profile(phone="555-123-4567")

        result = ProfileRepository.update_phone(2, "555-123-4567")

        assert result["phone"] == "555-123-4567"
        conn.commit.assert_called_once()

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_remove_member_deletes_progress_and_rejects(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchone.return_value = {"user_id": 2}

        assert ProfileRepository.remove_member(2) is True

        statements = [call.args[0] for call in cur.execute.call_args_list]
        assert "DELETE FROM reading_progress" in statements[0]
        assert "approval_status = 'rejected'" in statements[1]
        conn.commit.assert_called_once()

    @patch("reading_tracker.repositories.profile.get_db_connection")
    def test_remove_member_unknown_profile(self, mock_get_conn, db_setup):
        conn, cur = db_setup(mock_get_conn)
        cur.fetchone.return_value = None

        assert ProfileRepository.remove_member(99) is False
