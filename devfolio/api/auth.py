"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from devfolio.api.dependencies import CurrentUser
from devfolio.database import get_db
from devfolio.schemas.auth import AuthResponse, MeResponse, UserLogin, UserResponse, UserSignup
from devfolio.schemas.student import StudentResponse
from devfolio.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_email,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and their student profile."""
    # Check if user already exists
    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email",
        )

    user = create_user(db, user_data.name, user_data.email, user_data.password)
    token = create_access_token(user.id, user.role)

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(user.id, user.role)

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: CurrentUser):
    """Get the current user and their student profile."""
    student = current_user.student
    return MeResponse(
        user=UserResponse.model_validate(current_user),
        student=StudentResponse.model_validate(student) if student else None,
    )
