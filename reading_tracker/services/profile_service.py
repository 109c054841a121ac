"""Business logic for a member's own profile."""
from __future__ import annotations

import re
from typing import Any, Dict

from reading_tracker.repositories import ProfileRepository
from reading_tracker.utils.exceptions import NotFoundError, ValidationError

PHONE_PATTERN = re.compile(r"^[\d\s+\-()]+$")
PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 20


def normalize_phone(raw_value: str) -> str:
    """Trim and validate a phone number, raising ValidationError on bad input."""
    phone = (raw_value or "").strip()
    if len(phone) < PHONE_MIN_LENGTH:
        raise ValidationError("Phone number must be at least 10 digits")
    if len(phone) > PHONE_MAX_LENGTH:
        raise ValidationError("Phone number is too long")
    if not PHONE_PATTERN.match(phone):
        raise ValidationError("Please enter a valid phone number")
    return phone


class ProfileService:
    """Profile lookups and self-service updates."""

    def get_profile(self, user_id: int) -> Dict[str, Any]:
        profile = ProfileRepository.get_by_user_id(user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def update_phone(self, *, user_id: int, phone: str) -> Dict[str, Any]:
        profile = ProfileRepository.update_phone(user_id, normalize_phone(phone))
        if not profile:
            raise NotFoundError("Profile not found")
        return profile


def get_profile_service() -> ProfileService:
    return ProfileService()
