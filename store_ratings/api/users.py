"""User management API endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from store_ratings.api.dependencies import get_storage, require_admin
from store_ratings.models.enums import Role
from store_ratings.models.session import UserSession
from store_ratings.schemas.user import UserCreate, UserResponse
from store_ratings.services.storage import EmailAlreadyRegisteredError, StorageService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users(
    _admin: Annotated[UserSession, Depends(require_admin)],
    storage: Annotated[StorageService, Depends(get_storage)],
    search: str | None = None,
    role: Role | None = None,
):
    """List users by name, optionally filtered by a search term or role."""
    return storage.list_users(search=search, role=role)


@router.post("", response_model=UserResponse)
def create_user(
    user_data: UserCreate,
    _admin: Annotated[UserSession, Depends(require_admin)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Create a user with any role."""
    try:
        return storage.create_user(
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            address=user_data.address,
            role=user_data.role,
        )
    except EmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        ) from None
