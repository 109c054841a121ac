"""Custom exceptions for the Reading Tracker API."""
from fastapi import HTTPException


class DatabaseError(HTTPException):
    """Database-related errors."""
    def __init__(self, detail: str = "Database operation failed"):
        super().__init__(status_code=500, detail=detail)


class ValidationError(HTTPException):
    """Input validation errors."""
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=400, detail=detail)


class NotFoundError(HTTPException):
    """Requested record does not exist."""
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ApprovalRequiredError(HTTPException):
    """Caller is authenticated but their profile has not been approved."""
    def __init__(self, detail: str = "Account pending approval"):
        super().__init__(status_code=403, detail=detail)
