"""Server-side session store with signed cookie tokens."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from store_ratings.config import get_settings
from store_ratings.models.session import UserSession
from store_ratings.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()


class SessionStore:
    """Login sessions keyed by an opaque id.

    The cookie carries a JWT whose ``sid`` claim names a row in the sessions
    table and whose ``exp`` matches the row's absolute expiry. Both must be
    valid for a session to resolve; logging out deletes the row.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> str:
        """Start a session for the user and return the cookie token."""
        self.purge_expired()

        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=settings.session_ttl_minutes)
        session_id = secrets.token_urlsafe(32)
        session = UserSession(
            id=session_id,
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            user_role=user.role,
            created_at=now,
            expires_at=expires_at,
        )
        self.db.add(session)
        self.db.commit()
        logger.info(f"Started session for user {user.id}")
        return self._encode(session_id, expires_at)

    def resolve(self, token: str | None) -> UserSession | None:
        """Return the live session a cookie token refers to, if any."""
        session_id = self._decode(token)
        if session_id is None:
            return None
        return (
            self.db.query(UserSession)
            .filter(
                UserSession.id == session_id,
                UserSession.expires_at > datetime.now(UTC),
            )
            .first()
        )

    def destroy(self, token: str | None) -> None:
        """End the session a cookie token refers to. Unknown tokens are ignored."""
        session_id = self._decode(token)
        if session_id is None:
            return
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.id == session_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info(f"Destroyed session {session_id[:8]}...")

    def purge_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
        removed = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= datetime.now(UTC))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed

    def _encode(self, session_id: str, expires_at: datetime) -> str:
        return jwt.encode(
            {"sid": session_id, "exp": expires_at},
            settings.session_secret,
            algorithm=settings.session_algorithm,
        )

    def _decode(self, token: str | None) -> str | None:
        if not token:
            return None
        try:
            payload = jwt.decode(
                token, settings.session_secret, algorithms=[settings.session_algorithm]
            )
        except JWTError:
            return None
        return payload.get("sid")
