"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles governing endpoint access."""

    ADMIN = "admin"
    USER = "user"
    STORE_OWNER = "store_owner"

    def is_admin(self) -> bool:
        """Check if this role may use administrator endpoints."""
        return self == Role.ADMIN
