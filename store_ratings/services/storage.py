"""Persistence layer for users, stores and ratings."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from store_ratings.models.enums import Role
from store_ratings.models.rating import Rating
from store_ratings.models.store import Store
from store_ratings.models.user import User
from store_ratings.services.auth import get_password_hash

logger = logging.getLogger(__name__)

ZERO_AVERAGE = Decimal("0.00")
TWO_PLACES = Decimal("0.01")

STORE_SORT_COLUMNS = {
    "name": Store.name,
    "email": Store.email,
    "address": Store.address,
    "averageRating": Store.average_rating,
    "totalRatings": Store.total_ratings,
    "createdAt": Store.created_at,
}


class EmailAlreadyRegisteredError(Exception):
    """A user with this email already exists."""


class StoreEmailAlreadyRegisteredError(Exception):
    """A store with this email already exists."""


def format_average(value: Any) -> Decimal:
    """Round a database average to two places; no ratings means 0.00."""
    if value is None:
        return ZERO_AVERAGE
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class StorageService:
    """Repository-style access to the relational store.

    Writes commit before returning so that the rating aggregate is always
    recomputed against durable rows.
    """

    def __init__(self, db: Session):
        self.db = db

    # Users

    def get_user_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email, ignoring case."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        address: str | None = None,
        role: Role = Role.USER,
    ) -> User:
        """Create a user, hashing the plaintext password.

        Raises:
            EmailAlreadyRegisteredError: if the email is taken.
        """
        if self.get_user_by_email(email):
            raise EmailAlreadyRegisteredError(email)

        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=get_password_hash(password),
            address=address,
            role=Role(role).value,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Created user {user.id} with role {user.role}")
        return user

    def update_user_password(self, user_id: int, password_hash: str) -> None:
        """Replace a user's stored password hash."""
        self.db.query(User).filter(User.id == user_id).update({User.password_hash: password_hash})
        self.db.commit()

    def list_users(self, search: str | None = None, role: Role | None = None) -> list[User]:
        """List users ordered by name, optionally filtered."""
        query = self.db.query(User)
        if search:
            query = query.filter(
                or_(
                    User.name.icontains(search, autoescape=True),
                    User.email.icontains(search, autoescape=True),
                    User.address.icontains(search, autoescape=True),
                )
            )
        if role is not None:
            query = query.filter(User.role == Role(role).value)
        return query.order_by(User.name.asc(), User.id.asc()).all()

    # Stores

    def create_store(self, name: str, email: str, address: str, owner_id: int) -> Store:
        """Create a store with an empty rating aggregate.

        Raises:
            StoreEmailAlreadyRegisteredError: if another store uses the email.
        """
        normalized = normalize_email(email)
        if self.db.query(Store).filter(Store.email == normalized).first():
            raise StoreEmailAlreadyRegisteredError(email)

        store = Store(
            name=name,
            email=normalized,
            address=address,
            owner_id=owner_id,
            average_rating=ZERO_AVERAGE,
            total_ratings=0,
        )
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        logger.info(f"Created store {store.id} owned by user {owner_id}")
        return store

    def get_store_by_id(self, store_id: int) -> Store | None:
        """Get a store by id."""
        return self.db.query(Store).filter(Store.id == store_id).first()

    def list_stores(self, sort_by: str = "name", sort_order: str = "asc") -> list[Store]:
        """List all stores, by name ascending unless told otherwise."""
        return self._sorted(self.db.query(Store), sort_by, sort_order).all()

    def list_stores_by_owner(self, owner_id: int) -> list[Store]:
        """List the stores owned by a user."""
        return (
            self.db.query(Store)
            .filter(Store.owner_id == owner_id)
            .order_by(Store.name.asc(), Store.id.asc())
            .all()
        )

    def search_stores(
        self, query: str, sort_by: str = "name", sort_order: str = "asc"
    ) -> list[Store]:
        """Case-insensitive substring search over store name and address."""
        matches = self.db.query(Store).filter(
            or_(
                Store.name.icontains(query, autoescape=True),
                Store.address.icontains(query, autoescape=True),
            )
        )
        return self._sorted(matches, sort_by, sort_order).all()

    def _sorted(self, query, sort_by: str, sort_order: str):
        column = STORE_SORT_COLUMNS.get(sort_by, Store.name)
        if sort_order == "desc":
            return query.order_by(column.desc(), Store.id.desc())
        return query.order_by(column.asc(), Store.id.asc())

    def recompute_store_aggregate(self, store_id: int) -> None:
        """Rewrite a store's average and count from its rating rows."""
        average, total = (
            self.db.query(func.avg(Rating.rating), func.count(Rating.id))
            .filter(Rating.store_id == store_id)
            .one()
        )
        self.db.query(Store).filter(Store.id == store_id).update(
            {
                Store.average_rating: format_average(average),
                Store.total_ratings: total or 0,
            }
        )
        self.db.commit()
        logger.debug(f"Store {store_id} aggregate: {format_average(average)} over {total} ratings")

    # Ratings

    def get_rating(self, user_id: int, store_id: int) -> Rating | None:
        """Get the rating a user gave a store."""
        return (
            self.db.query(Rating)
            .filter(Rating.user_id == user_id, Rating.store_id == store_id)
            .first()
        )

    def create_rating(
        self, user_id: int, store_id: int, rating: int, review: str | None = None
    ) -> Rating:
        """Insert a rating, then recompute the store aggregate.

        Raises sqlalchemy's IntegrityError if the (user, store) pair exists.
        """
        row = Rating(user_id=user_id, store_id=store_id, rating=rating, review=review)
        self.db.add(row)
        self.db.commit()

        self.recompute_store_aggregate(store_id)
        self.db.refresh(row)
        logger.info(f"User {user_id} rated store {store_id}: {rating}")
        return row

    def update_rating(self, user_id: int, store_id: int, **fields: Any) -> Rating | None:
        """Update the (user, store) rating with the given fields, then recompute.

        Returns None when the user has not rated the store.
        """
        row = self.get_rating(user_id, store_id)
        if row is None:
            return None

        for key, value in fields.items():
            setattr(row, key, value)
        self.db.commit()

        self.recompute_store_aggregate(store_id)
        self.db.refresh(row)
        logger.info(f"User {user_id} updated rating of store {store_id}: {row.rating}")
        return row

    def list_ratings_by_store(self, store_id: int) -> list[Rating]:
        """List a store's ratings, newest first."""
        return (
            self.db.query(Rating)
            .filter(Rating.store_id == store_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .all()
        )

    def list_ratings_by_user(self, user_id: int) -> list[Rating]:
        """List a user's ratings, newest first."""
        return (
            self.db.query(Rating)
            .filter(Rating.user_id == user_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .all()
        )

    # Statistics

    def get_statistics(self) -> dict[str, int]:
        """Count users, stores and ratings independently."""
        return {
            "total_users": self.db.query(func.count(User.id)).scalar() or 0,
            "total_stores": self.db.query(func.count(Store.id)).scalar() or 0,
            "total_ratings": self.db.query(func.count(Rating.id)).scalar() or 0,
        }
