"""Authentication routes for member registration, login and session lookup."""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from psycopg2 import IntegrityError

from reading_tracker.auth import (
    clear_auth_cookie,
    create_access_token,
    create_user,
    get_current_user_dependency,
    get_user_by_email,
    is_admin,
    set_auth_cookie,
    verify_password,
)
from reading_tracker.models.schemas import LoginResponse, SessionInfo, User, UserCreate, UserLogin
from reading_tracker.repositories import ProfileRepository
from reading_tracker.services.profile_service import normalize_phone

import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])


def build_session_info(user: dict) -> dict:
    """Combine user, profile and role lookups into the client's session view."""
    profile = ProfileRepository.get_by_user_id(user["id"])
    approval_status = profile.get("approval_status") if profile else None
    return SessionInfo(
        user=User.model_validate(user),
        profile=profile,
        approval_status=approval_status,
        is_approved=approval_status == "approved",
        is_admin=is_admin(user["id"]),
    ).model_dump()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate):
    """Register a new member; the profile starts out pending approval."""
    phone = normalize_phone(user_data.phone) if user_data.phone else None
    try:
        existing_user = get_user_by_email(user_data.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

        user = create_user(
            email=user_data.email,
            full_name=user_data.full_name.strip(),
            password=user_data.password,
            phone=phone,
        )

        logger.info(f"New member registered (pending approval): {user['email']}")
        return User.model_validate(user).model_dump()

    except HTTPException:
        raise
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    except Exception as e:
        logger.error(f"Registration error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, response: Response):
    """Authenticate a member and return a bearer token (also set as a cookie)."""
    user = get_user_by_email(credentials.email)

    if not user or not verify_password(credentials.password, user["hashed_password"]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user account"
        )

    access_token = create_access_token(data={"sub": str(user["id"])})
    set_auth_cookie(response, access_token)

    logger.info(f"User logged in: {user['email']}")

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "session": build_session_info(user),
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    """Terminate the current session by clearing the auth cookie."""
    clear_auth_cookie(response)
    response.status_code = status.HTTP_204_NO_CONTENT
    return None


@router.get("/me", response_model=SessionInfo)
async def get_current_session(current_user: dict = Depends(get_current_user_dependency)):
    """Current user with approval status and admin flag."""
    return build_session_info(current_user)
