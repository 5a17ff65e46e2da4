"""FastAPI dependencies for sessions, roles and persistence."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from store_ratings.config import get_settings
from store_ratings.database import get_db
from store_ratings.models.session import UserSession
from store_ratings.services.sessions import SessionStore
from store_ratings.services.storage import StorageService

settings = get_settings()

session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def get_session_store(
    db: Annotated[Session, Depends(get_db)],
) -> SessionStore:
    """Get the session store bound to the request's database session."""
    return SessionStore(db)


def get_storage(
    db: Annotated[Session, Depends(get_db)],
) -> StorageService:
    """Get the persistence layer bound to the request's database session."""
    return StorageService(db)


def get_current_session(
    token: Annotated[str | None, Depends(session_cookie)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
) -> UserSession | None:
    """Resolve the session cookie, or None for anonymous callers."""
    return sessions.resolve(token)


def require_authenticated(
    current_session: Annotated[UserSession | None, Depends(get_current_session)],
) -> UserSession:
    """Reject callers without a live session."""
    if current_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return current_session


def require_admin(
    current_session: Annotated[UserSession, Depends(require_authenticated)],
) -> UserSession:
    """Reject sessions whose role snapshot is not admin."""
    if not current_session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return current_session
