"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT access tokens carrying the user ID and role
- FastAPI dependencies resolving the caller's account and profile
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import text

from careers.core.config import get_settings
from careers.db.database import get_db_session
from careers.schemas.schemas import UserRole

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

bearer_scheme = HTTPBearer()

# Profile key for each role, as returned by get_current_user
PROFILE_KEYS = {
    UserRole.student: "student_id",
    UserRole.employer: "employer_id",
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed token for a user.

    Claims: sub (user ID as string), role, iat, exp.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes)),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Verified claims, or None for a bad signature, expired or malformed token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - the authenticated account with its profile ID.

    Returns {"user_id", "email", "role", "student_id", "employer_id"}; the
    profile ID not matching the role is None.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload or not str(payload.get("sub", "")).isdigit():
        raise credentials_exception

    with get_db_session() as db:
        row = db.execute(
            text("""
                SELECT u.user_id, u.email, u.role, u.is_active, s.student_id, e.employer_id
                FROM users u
                LEFT JOIN student_profiles s ON s.user_id = u.user_id
                LEFT JOIN employer_profiles e ON e.user_id = u.user_id
                WHERE u.user_id = :id
            """),
            {"id": int(payload["sub"])}
        ).fetchone()

    if not row:
        raise credentials_exception

    user_id, email, role, is_active, student_id, employer_id = row
    if not is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return {
        "user_id": user_id,
        "email": email,
        "role": role,
        "student_id": student_id,
        "employer_id": employer_id,
    }


def require_role(role: UserRole) -> Callable:
    """Build a dependency that admits only `role` accounts that have a profile."""
    profile_key = PROFILE_KEYS[role]
    label = "Students" if role == UserRole.student else "Employers"

    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] != role.value:
            raise HTTPException(status_code=403, detail=f"{label} only")
        if user[profile_key] is None:
            raise HTTPException(status_code=404, detail=f"{role.value.title()} profile not found")
        return user

    return dependency


get_current_student = require_role(UserRole.student)
get_current_employer = require_role(UserRole.employer)
