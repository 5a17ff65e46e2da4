"""User schemas."""

from datetime import datetime

from store_ratings.models.enums import Role
from store_ratings.schemas.base import Address, CamelModel, Email, Password, UserName


class UserCreate(CamelModel):
    """Administrator-created user of any role."""

    name: UserName
    email: Email
    password: Password
    address: Address = None
    role: Role = Role.USER


class UserResponse(CamelModel):
    """User information response. Never carries the password hash."""

    id: int
    name: str
    email: str
    address: str | None
    role: Role
    created_at: datetime
    updated_at: datetime
