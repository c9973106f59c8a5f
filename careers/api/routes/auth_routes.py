"""
Authentication Routes

POST /auth/register - Register new user together with their profile
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from careers.db.database import get_db_session
from careers.core.auth import hash_password, verify_password, create_access_token, get_current_user
from careers.services.profile_service import create_student_profile, create_employer_profile
from careers.schemas.schemas import (
    RegisterRequest, RegisterResponse, LoginRequest, TokenResponse, UserResponse, UserRole
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new student or employer account.

    The matching profile is created in the same transaction, so a user
    never exists without one.
    """
    profile_data = request.model_dump(exclude={"email", "password", "role"})

    with get_db_session() as db:
        # Check email exists
        result = db.execute(
            text("SELECT user_id FROM users WHERE LOWER(email) = LOWER(:email)"),
            {"email": request.email}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="User already exists")

        result = db.execute(
            text("""
                INSERT INTO users (email, password_hash, role)
                VALUES (:email, :password_hash, :role)
                RETURNING user_id
            """),
            {
                "email": request.email,
                "password_hash": hash_password(request.password),
                "role": request.role.value
            }
        )
        user_id = result.fetchone()[0]

        if request.role == UserRole.student:
            create_student_profile(db, user_id, profile_data)
        else:
            create_employer_profile(db, user_id, profile_data)

    logger.info("Registered %s account %s", request.role.value, user_id)
    return RegisterResponse(message="User created successfully", user_id=user_id)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    with get_db_session() as db:
        result = db.execute(
            text("SELECT user_id, password_hash, role, is_active FROM users WHERE LOWER(email) = LOWER(:email)"),
            {"email": request.email}
        )
        user = result.fetchone()

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user_id, password_hash, role, is_active = user

    if not is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, password_hash):
        logger.warning("Failed login for user %s", user_id)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(user_id, role)

    return TokenResponse(access_token=token, user_id=user_id, role=role)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    with get_db_session() as db:
        result = db.execute(
            text("SELECT user_id, email, role, is_active, created_at FROM users WHERE user_id = :id"),
            {"id": user["user_id"]}
        )
        row = result.fetchone()

    return UserResponse(
        user_id=row[0], email=row[1], role=row[2], is_active=row[3], created_at=row[4]
    )
