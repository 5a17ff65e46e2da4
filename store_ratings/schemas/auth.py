"""Authentication schemas."""

from pydantic import field_validator

from store_ratings.schemas.base import Address, CamelModel, Email, Password, UserName
from store_ratings.schemas.user import UserResponse


class UserRegister(CamelModel):
    """Self-service registration request. The role is always ``user``."""

    name: UserName
    email: Email
    password: Password
    address: Address = None


class UserLogin(CamelModel):
    """User login request."""

    email: Email
    password: str

    @field_validator("password")
    @classmethod
    def password_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class ChangePasswordRequest(CamelModel):
    """Change password request."""

    current_password: str
    new_password: Password

    @field_validator("current_password")
    @classmethod
    def current_password_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Current password is required")
        return value


class AuthResponse(CamelModel):
    """Authentication response wrapping the user."""

    user: UserResponse


class MessageResponse(CamelModel):
    """Plain message response."""

    message: str
