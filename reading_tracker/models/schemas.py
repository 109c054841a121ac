"""Pydantic models for request/response schemas."""
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List


class ApprovalStatus(str, Enum):
    """Lifecycle of a member profile."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class HealthCheck(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str = "1.0.0"


# Authentication Schemas
class UserCreate(BaseModel):
    """Request model for member registration."""
    email: EmailStr = Field(..., description="User's email address")
    full_name: str = Field(..., min_length=2, max_length=100, description="Full name")
    password: str = Field(..., min_length=6, max_length=100, description="Password")
    phone: Optional[str] = Field(default=None, max_length=20, description="Phone number")


class UserLogin(BaseModel):
    """Request model for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="Password")


class User(BaseModel):
    """Response model for user data."""
    id: int
    email: str
    is_active: bool
    created_at: datetime


class Profile(BaseModel):
    """Member profile."""
    user_id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    approval_status: ApprovalStatus
    created_at: datetime
    updated_at: Optional[datetime] = None


class SessionInfo(BaseModel):
    """What a signed-in client needs to know about itself."""
    user: User
    profile: Optional[Profile] = None
    approval_status: Optional[ApprovalStatus] = None
    is_approved: bool
    is_admin: bool


class LoginResponse(BaseModel):
    """Access token plus the session it belongs to."""
    access_token: str
    token_type: str = "bearer"
    session: SessionInfo


class PhoneUpdate(BaseModel):
    """Request model for updating a profile phone number."""
    phone: str = Field(..., description="Phone number")


# Reading plan
class ReadingPlanDay(BaseModel):
    """One day of the reading plan catalog."""
    day_number: int = Field(..., ge=1)
    date: str
    month: int = Field(..., ge=1, le=12)
    primary_text: str
    secondary_text: str


class ReadingPlanToday(BaseModel):
    """Current plan day."""
    date: str
    day_number: int
    entry: Optional[ReadingPlanDay] = None


# Progress
class ProgressRecord(BaseModel):
    """A persisted completion marker."""
    user_id: int
    day: int = Field(..., ge=1)
    completed_at: datetime


class ProgressUpsert(BaseModel):
    """Optional body for marking a day complete."""
    completed_at: Optional[datetime] = None


# Admin
class ApprovalUpdate(BaseModel):
    """Request model for changing a profile's approval status."""
    approval_status: ApprovalStatus


class ProgressSummaryRow(BaseModel):
    """Aggregate progress for one approved member."""
    user_id: int
    full_name: str
    email: str
    completed: int = Field(..., ge=0)
    percent: float = Field(..., ge=0)


class ProgressSummaryResponse(BaseModel):
    """Admin progress summary."""
    total_days: int
    members: List[ProgressSummaryRow]
