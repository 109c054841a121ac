"""Configuration for pytest."""
import pytest
from unittest.mock import Mock


@pytest.fixture
def mock_settings():
    """Mock application settings for testing."""
    settings = Mock()
    settings.app_name = "Test Reading Tracker API"
    settings.debug = True
    settings.db_name = "test_db"
    settings.db_user = "test_user"
    settings.db_password = "test_password"
    settings.db_host = "localhost"
    settings.db_port = 5432
    settings.plan_timezone = "UTC"
    settings.plan_start_date = None
    settings.export_filename_prefix = "reading_tracker_export"
    settings.allowed_origins = ["http://localhost:3000"]
    return settings
