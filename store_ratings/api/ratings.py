"""Rating API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from store_ratings.api.dependencies import get_storage, require_authenticated
from store_ratings.models.session import UserSession
from store_ratings.schemas.rating import RatingCreate, RatingResponse, RatingWithUserResponse
from store_ratings.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.post("", response_model=RatingResponse)
def submit_rating(
    rating_data: RatingCreate,
    current_session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Create the caller's rating of a store, or update it if one exists.

    The rater is taken from the session. A concurrent first submission for the
    same store loses the insert to the unique constraint and is retried as an
    update.
    """
    user_id = current_session.user_id
    store_id = rating_data.store_id

    if storage.get_store_by_id(store_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")

    changes = rating_data.model_dump(include={"rating", "review"}, exclude_unset=True)

    if storage.get_rating(user_id, store_id) is not None:
        return storage.update_rating(user_id, store_id, **changes)

    try:
        return storage.create_rating(
            user_id=user_id,
            store_id=store_id,
            rating=rating_data.rating,
            review=rating_data.review,
        )
    except IntegrityError:
        storage.db.rollback()
        logger.warning(f"Rating insert for user {user_id} store {store_id} raced; updating")

    rating = storage.update_rating(user_id, store_id, **changes)
    if rating is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit rating",
        )
    return rating


@router.get("/store/{store_id}", response_model=list[RatingWithUserResponse])
def list_store_ratings(
    store_id: int,
    _session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """List a store's ratings with the name and email of each rater."""
    return storage.list_ratings_by_store(store_id)


@router.get("/mine", response_model=list[RatingResponse])
def list_my_ratings(
    current_session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """List the caller's own ratings."""
    return storage.list_ratings_by_user(current_session.user_id)
