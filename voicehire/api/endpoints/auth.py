"""
Auth API endpoints

Handles:
- Registration
- Login
- Current user profile
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voicehire.api.dependencies import get_current_user
from voicehire.core.security import create_access_token, hash_password, verify_password
from voicehire.db.database import get_db
from voicehire.db.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class RegisterRequest(BaseModel):
    """Request model for account creation."""
    name: str
    email: EmailStr
    password: str = Field(..., min_length=6)
    photo: str | None = None

    @field_validator("name")
    @classmethod
    def name_min_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(BaseModel):
    """Request model for login."""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UpdateProfileRequest(BaseModel):
    """Request model for profile updates; omitted fields keep their value."""
    name: str | None = None
    photo: str | None = None


class UserResponse(BaseModel):
    """Public view of a user."""
    id: int
    name: str
    email: str
    photo: str | None = None
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Response after register or login."""
    message: str
    token: str
    user: UserResponse


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        photo=user.photo,
        created_at=user.created_at,
    )


def _issue_token(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, name=user.name)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Create an account and return an access token."""
    if db.scalar(select(User.id).where(User.email == request.email)) is not None:
        raise HTTPException(status_code=409, detail="An account with this email already exists.")

    user = User(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        photo=request.photo,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="An account with this email already exists.")
    db.refresh(user)

    logger.info(f"Registered user {user.id}")

    return AuthResponse(
        message="Account created successfully!",
        token=_issue_token(user),
        user=_user_response(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Exchange email and password for an access token."""
    user = db.scalar(select(User).where(User.email == request.email))

    if user is None or not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    return AuthResponse(
        message="Logged in successfully!",
        token=_issue_token(user),
        user=_user_response(user),
    )


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)) -> UserResponse:
    """Get the authenticated user."""
    return _user_response(user)


@router.put("/update-profile", response_model=UserResponse)
def update_profile(
    request: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Update display name and photo."""
    if request.name is not None:
        name = request.name.strip()
        if len(name) < 2:
            raise HTTPException(status_code=422, detail="Name must be at least 2 characters")
        user.name = name
    if request.photo is not None:
        user.photo = request.photo or None

    db.commit()
    db.refresh(user)
    return _user_response(user)
