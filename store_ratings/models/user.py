"""User model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from store_ratings.database import Base
from store_ratings.models.enums import Role
from store_ratings.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, ownership and ratings."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    role = Column(String(20), nullable=False, default=Role.USER.value, server_default="user")

    # Relationships
    ratings = relationship("Rating", back_populates="user")
    owned_stores = relationship("Store", back_populates="owner")
