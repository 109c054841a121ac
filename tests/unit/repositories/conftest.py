"""Shared fixtures for repository unit tests."""
import pytest
from unittest.mock import MagicMock


def setup_db(mock_get_conn):
    """Wire a patched get_db_connection to yield (connection, cursor) mocks."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


@pytest.fixture
def db_setup():
    return setup_db
