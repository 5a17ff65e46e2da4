"""Store model."""

from decimal import Decimal

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from store_ratings.database import Base
from store_ratings.models.mixins import TimestampMixin


class Store(Base, TimestampMixin):
    """Store model with a denormalized rating aggregate.

    average_rating and total_ratings mirror avg(rating) and count(*) over the
    store's ratings and are rewritten after every rating write.
    """

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    address = Column(Text, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    average_rating = Column(
        Numeric(3, 2), nullable=False, default=Decimal("0.00"), server_default="0.00"
    )
    total_ratings = Column(Integer, nullable=False, default=0, server_default="0")

    # Relationships
    owner = relationship("User", back_populates="owned_stores")
    ratings = relationship("Rating", back_populates="store")
