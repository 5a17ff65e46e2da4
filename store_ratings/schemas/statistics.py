"""Statistics schemas."""

from store_ratings.schemas.base import CamelModel


class StatisticsResponse(CamelModel):
    """Platform-wide counts."""

    total_users: int
    total_stores: int
    total_ratings: int
