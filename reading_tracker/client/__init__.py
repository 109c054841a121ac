"""Async client for the Reading Tracker API.

The progress engine and admin console are re-exported here for convenient imports.
"""
from reading_tracker.client.admin import AdminConsole
from reading_tracker.client.auth_provider import AuthProvider, AuthSession, HttpAuthProvider, StaticAuthProvider
from reading_tracker.client.config import ClientSettings, create_http_client, get_client_settings
from reading_tracker.client.engine import ProgressEngine
from reading_tracker.client.errors import AuthorizationError, RecordStoreError
from reading_tracker.client.notifications import Notification, NotificationCenter
from reading_tracker.client.record_store import ExportReport, HttpRecordStore, RecordStore

__all__ = [
    "AdminConsole",
    "AuthProvider",
    "AuthSession",
    "AuthorizationError",
    "ClientSettings",
    "ExportReport",
    "HttpAuthProvider",
    "HttpRecordStore",
    "Notification",
    "NotificationCenter",
    "ProgressEngine",
    "RecordStore",
    "RecordStoreError",
    "StaticAuthProvider",
    "create_http_client",
    "get_client_settings",
]
