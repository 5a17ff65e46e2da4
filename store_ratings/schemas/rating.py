"""Rating schemas."""

from datetime import datetime

from pydantic import StrictInt, field_validator

from store_ratings.schemas.base import CamelModel


class RatingCreate(CamelModel):
    """Submit (create or update) the caller's rating of a store.

    The rater is always the session user; a userId in the body is ignored.
    """

    store_id: StrictInt
    rating: StrictInt
    review: str | None = None

    @field_validator("rating")
    @classmethod
    def check_rating(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Rating must be at least 1")
        if value > 5:
            raise ValueError("Rating must not exceed 5")
        return value

    @field_validator("review")
    @classmethod
    def check_review(cls, value: str | None) -> str | None:
        if value is not None and len(value) > 1000:
            raise ValueError("Review must not exceed 1000 characters")
        return value


class RatingResponse(CamelModel):
    """Rating response."""

    id: int
    user_id: int
    store_id: int
    rating: int
    review: str | None
    created_at: datetime
    updated_at: datetime


class RaterInfo(CamelModel):
    """Public details of the user who left a rating."""

    name: str
    email: str


class RatingWithUserResponse(RatingResponse):
    """Rating annotated with its rater."""

    user: RaterInfo | None
