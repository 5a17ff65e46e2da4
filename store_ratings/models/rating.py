"""Rating model."""

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from store_ratings.database import Base
from store_ratings.models.mixins import TimestampMixin


class Rating(Base, TimestampMixin):
    """A user's 1-5 star rating of a store, at most one per (user, store)."""

    __tablename__ = "ratings"
    __table_args__ = (UniqueConstraint("user_id", "store_id", name="uq_rating_user_store"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    review = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")
