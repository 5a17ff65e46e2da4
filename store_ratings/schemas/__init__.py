"""Pydantic schemas for API requests and responses."""

from store_ratings.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    MessageResponse,
    UserLogin,
    UserRegister,
)
from store_ratings.schemas.rating import RatingCreate, RatingResponse, RatingWithUserResponse
from store_ratings.schemas.statistics import StatisticsResponse
from store_ratings.schemas.store import StoreCreate, StoreListItem, StoreResponse
from store_ratings.schemas.user import UserCreate, UserResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "ChangePasswordRequest",
    "AuthResponse",
    "MessageResponse",
    "UserCreate",
    "UserResponse",
    "StoreCreate",
    "StoreResponse",
    "StoreListItem",
    "RatingCreate",
    "RatingResponse",
    "RatingWithUserResponse",
    "StatisticsResponse",
]
