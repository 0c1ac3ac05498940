import logging
from typing import Optional

from sqlalchemy.orm import Session

from leasekeeper.config import Settings
from leasekeeper.database.models import User
from leasekeeper.schemas.auth_schema import UserCreate
from leasekeeper.utils.dependencies import hash_password, verify_password

logger = logging.getLogger(__name__)


def create_user(payload: UserCreate, db: Session) -> User:
    user = User(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        hashed_password=hash_password(payload.password),
        is_active=True,
        is_banned=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter_by(email=email).first()


def authenticate_user(email: str, password: str, db: Session) -> Optional[User]:
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def authenticate_admin(username: str, password: str, settings: Settings) -> bool:
    """Check the admin credentials held in configuration."""
    if not settings.admin_password_hash:
        logger.warning("Admin login attempted but ADMIN_PASSWORD_HASH is not configured")
        return False
    if username != settings.admin_username:
        return False
    return verify_password(password, settings.admin_password_hash)
