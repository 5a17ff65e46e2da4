"""Store API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from store_ratings.api.dependencies import get_storage, require_admin, require_authenticated
from store_ratings.models.session import UserSession
from store_ratings.schemas.store import (
    SortOrder,
    StoreCreate,
    StoreListItem,
    StoreResponse,
    StoreSortField,
)
from store_ratings.services.storage import StorageService, StoreEmailAlreadyRegisteredError

router = APIRouter(prefix="/api/stores", tags=["stores"])


@router.get("", response_model=list[StoreListItem], response_model_exclude_unset=True)
def list_stores(
    current_session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
    search: str | None = None,
    sort_by: Annotated[StoreSortField, Query(alias="sortBy")] = "name",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "asc",
):
    """List or search stores.

    Callers other than administrators get each store annotated with their own
    rating (or null when they have not rated it).
    """
    if search:
        stores = storage.search_stores(search, sort_by, sort_order)
    else:
        stores = storage.list_stores(sort_by, sort_order)

    items = [StoreListItem.model_validate(store) for store in stores]
    if current_session.is_admin:
        return items

    own_ratings = {
        rating.store_id: rating.rating
        for rating in storage.list_ratings_by_user(current_session.user_id)
    }
    return [
        item.model_copy(update={"user_rating": own_ratings.get(item.id)}) for item in items
    ]


@router.post("", response_model=StoreResponse)
def create_store(
    store_data: StoreCreate,
    _admin: Annotated[UserSession, Depends(require_admin)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Create a store (admin only)."""
    if storage.get_user_by_id(store_data.owner_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Owner does not exist",
        )

    try:
        return storage.create_store(
            name=store_data.name,
            email=store_data.email,
            address=store_data.address,
            owner_id=store_data.owner_id,
        )
    except StoreEmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Store with this email already exists",
        ) from None


@router.get("/owner/{owner_id}", response_model=list[StoreResponse])
def list_owner_stores(
    owner_id: int,
    _session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """List the stores belonging to an owner. An owner may have several."""
    return storage.list_stores_by_owner(owner_id)


@router.get("/{store_id}", response_model=StoreResponse)
def get_store(
    store_id: int,
    _session: Annotated[UserSession, Depends(require_authenticated)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Get a single store."""
    store = storage.get_store_by_id(store_id)
    if store is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    return store
