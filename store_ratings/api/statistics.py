"""Platform statistics endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from store_ratings.api.dependencies import get_storage, require_admin
from store_ratings.models.session import UserSession
from store_ratings.schemas.statistics import StatisticsResponse
from store_ratings.services.storage import StorageService

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


@router.get("", response_model=StatisticsResponse)
def get_statistics(
    _admin: Annotated[UserSession, Depends(require_admin)],
    storage: Annotated[StorageService, Depends(get_storage)],
):
    """Count users, stores and ratings."""
    return storage.get_statistics()
