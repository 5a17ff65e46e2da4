"""Store schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import field_validator

from store_ratings.schemas.base import CamelModel, Email

StoreSortField = Literal["name", "email", "address", "averageRating", "totalRatings", "createdAt"]
SortOrder = Literal["asc", "desc"]


class StoreCreate(CamelModel):
    """Create a new store."""

    name: str
    email: Email
    address: str
    owner_id: int

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not value:
            raise ValueError("Store name is required")
        if len(value) > 255:
            raise ValueError("Store name must not exceed 255 characters")
        return value

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        if not value:
            raise ValueError("Address is required")
        if len(value) > 400:
            raise ValueError("Address must not exceed 400 characters")
        return value


class StoreResponse(CamelModel):
    """Store response.

    average_rating is rendered with exactly two fractional digits, "0.00" for
    a store nobody has rated.
    """

    id: int
    name: str
    email: str
    address: str
    owner_id: int
    average_rating: str
    total_ratings: int
    created_at: datetime
    updated_at: datetime

    @field_validator("average_rating", mode="before")
    @classmethod
    def format_average(cls, value: Decimal | float | str | None) -> str:
        return f"{Decimal(str(value if value is not None else 0)):.2f}"

    @field_validator("total_ratings", mode="before")
    @classmethod
    def default_total(cls, value: int | None) -> int:
        return value or 0


class StoreListItem(StoreResponse):
    """Store in a listing; non-admin callers also see their own rating."""

    user_rating: int | None = None
