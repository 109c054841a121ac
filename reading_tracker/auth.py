"""Authentication utilities for JWT tokens, password hashing and access checks."""
from datetime import datetime, timedelta, timezone
from typing import Optional
import inspect

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext

from reading_tracker.config import get_settings
from reading_tracker.database import get_db_connection
from reading_tracker.repositories import ProfileRepository, UserRoleRepository
from reading_tracker.utils.exceptions import ApprovalRequiredError

import logging

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

settings = get_settings()

SECRET_KEY = settings.secret_key
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes

ADMIN_ROLE = "admin"
MEMBER_ROLE = "member"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _extract_token_from_request(request: Optional[Request]) -> Optional[str]:
    if request is None:
        return None

    auth_header = request.headers.get("Authorization")
    if auth_header:
        scheme, param = get_authorization_scheme_param(auth_header)
        if scheme.lower() == "bearer" and param:
            return param

    return request.cookies.get(settings.auth_cookie_name)


async def _resolve_dependency_override(request: Optional[Request], dependency):
    """Return override result and flag if FastAPI dependency override exists."""
    if request is None:
        return None, False

    overrides = getattr(getattr(request, "app", None), "dependency_overrides", None)
    if not overrides:
        return None, False

    override = overrides.get(dependency)
    if override is None:
        return None, False

    result = override()
    if inspect.isawaitable(result):
        result = await result
    return result, True


def set_auth_cookie(response: Response, token: str) -> None:
    """Persist the JWT in an HttpOnly cookie."""
    cookie_domain = settings.auth_cookie_domain or None
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.auth_cookie_max_age,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite=settings.auth_cookie_samesite,
        domain=cookie_domain,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    """Remove the authentication cookie from the client."""
    cookie_domain = settings.auth_cookie_domain or None
    response.delete_cookie(
        key=settings.auth_cookie_name,
        domain=cookie_domain,
        path="/",
    )


def _convert_user(row: Optional[dict]) -> Optional[dict]:
    """Normalize database rows to plain dicts for downstream consumers."""
    if not row:
        return None
    return {
        "id": row["id"],
        "email": row["email"],
        "is_active": row["is_active"],
        "created_at": row["created_at"],
        **({"hashed_password": row["hashed_password"]} if "hashed_password" in row else {})
    }


def get_user_by_email(email: str) -> Optional[dict]:
    """Get a user by email from the database."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, email, hashed_password, is_active, created_at FROM users WHERE LOWER(email) = LOWER(%s)",
                (email,)
            )
            return _convert_user(cur.fetchone())


def get_user_by_id(user_id: int) -> Optional[dict]:
    """Get a user by ID from the database."""
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, email, is_active, created_at FROM users WHERE id = %s",
                (user_id,)
            )
            return _convert_user(cur.fetchone())


def create_user(email: str, full_name: str, password: str, phone: Optional[str] = None) -> dict:
    """Create a user with a pending profile and the member role in one transaction."""
    hashed_password = get_password_hash(password)
    with get_db_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO users (email, hashed_password, is_active)
                VALUES (%s, %s, TRUE)
                RETURNING id, email, is_active, created_at
                """,
                (email, hashed_password)
            )
            user = cur.fetchone()
            cur.execute(
                """
                INSERT INTO profiles (user_id, full_name, email, phone, approval_status)
                VALUES (%s, %s, %s, %s, 'pending')
                """,
                (user["id"], full_name, email, phone)
            )
            cur.execute(
                "INSERT INTO user_roles (user_id, role) VALUES (%s, %s) ON CONFLICT DO NOTHING",
                (user["id"], MEMBER_ROLE)
            )
            conn.commit()
            return _convert_user(user)


def is_admin(user_id: int) -> bool:
    return UserRoleRepository.has_role(user_id, ADMIN_ROLE)


async def get_current_user(
    request: Optional[Request] = None,
    token: Optional[str] = None,
) -> dict:
    """Get the current authenticated user from the JWT token."""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_value = token or _extract_token_from_request(request)
    if not token_value:
        raise credentials_exception

    try:
        payload = jwt.decode(token_value, SECRET_KEY, algorithms=[ALGORITHM])
        user_id: Optional[str] = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = get_user_by_id(int(user_id))
    if user is None:
        raise credentials_exception

    if not user["is_active"]:
        raise HTTPException(status_code=400, detail="Inactive user")

    return user


async def get_current_user_dependency(request: Request) -> dict:
    """Wrapper for FastAPI dependency injection of required current user."""
    override_value = await _resolve_dependency_override(request, get_current_user)
    if override_value[1]:
        return override_value[0]

    return await get_current_user(request=request)


async def get_current_admin_user(current_user: dict = Depends(get_current_user_dependency)) -> dict:
    """Require current user to hold the admin role."""
    if not is_admin(current_user["id"]):
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user


async def get_current_approved_user(current_user: dict = Depends(get_current_user_dependency)) -> dict:
    """Require current user to have an approved profile."""
    profile = ProfileRepository.get_by_user_id(current_user["id"])
    if not profile or profile.get("approval_status") != "approved":
        raise ApprovalRequiredError()
    return {**current_user, "profile": profile}
