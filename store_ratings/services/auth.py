"""Password hashing and credential checks."""

import logging

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from store_ratings.config import get_settings
from store_ratings.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user:
        logger.warning(f"Login attempt for unknown email {email}")
        return None
    if not verify_password(password, user.password_hash):
        logger.warning(f"Login attempt with wrong password for user {user.id}")
        return None
    return user
