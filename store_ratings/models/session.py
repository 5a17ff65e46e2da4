"""Server-side login session model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from store_ratings.database import Base
from store_ratings.models.enums import Role


class UserSession(Base):
    """A login session keyed by an opaque id.

    The user's name, email and role are snapshotted at login; role checks read
    the snapshot, so a role change takes effect on the next login.
    """

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user_name = Column(String(60), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_role = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    @property
    def is_admin(self) -> bool:
        """Check if the snapshotted role is admin."""
        return Role(self.user_role).is_admin()
