"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from store_ratings.api.dependencies import (
    get_session_store,
    get_storage,
    require_authenticated,
    session_cookie,
)
from store_ratings.config import get_settings
from store_ratings.database import get_db
from store_ratings.models.enums import Role
from store_ratings.models.session import UserSession
from store_ratings.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    MessageResponse,
    UserLogin,
    UserRegister,
)
from store_ratings.schemas.user import UserResponse
from store_ratings.services.auth import authenticate_user, get_password_hash, verify_password
from store_ratings.services.sessions import SessionStore
from store_ratings.services.storage import EmailAlreadyRegisteredError, StorageService

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(
    user_data: UserRegister,
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Register a new user. Self-service accounts always get the user role."""
    try:
        user = storage.create_user(
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            address=user_data.address,
            role=Role.USER,
        )
    except EmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        ) from None

    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
    previous_token: Annotated[str | None, Depends(session_cookie)],
):
    """Login with email and password, starting a new session."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    sessions.destroy(previous_token)
    token = sessions.create(user)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    sessions: Annotated[SessionStore, Depends(get_session_store)],
    token: Annotated[str | None, Depends(session_cookie)],
):
    """End the current session, if there is one."""
    try:
        sessions.destroy(token)
    except SQLAlchemyError:
        logger.exception("Failed to destroy session")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Logout failed",
        ) from None

    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AuthResponse)
def get_me(
    current_session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Get current user information."""
    user = storage.get_user_by_id(current_session.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    current_session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Change the current user's password after checking the old one."""
    user = storage.get_user_by_id(current_session.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(payload.current_password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    storage.update_user_password(user.id, get_password_hash(payload.new_password))
    logger.info(f"User {user.id} changed their password")
    return MessageResponse(message="Password updated successfully")
