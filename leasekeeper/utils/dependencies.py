from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from functools import lru_cache
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone
from typing import Optional

from leasekeeper.config import Settings, get_settings
from leasekeeper.database.init import get_db
from leasekeeper.database.models.user_model import User
from leasekeeper.enums.role import Role
from leasekeeper.schemas.auth_schema import Principal
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.services.email_service import EmailService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/signin", auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password):
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_access_token(
    data: dict, settings: Settings, expires_delta: Optional[timedelta] = None
):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.token_signing_key, algorithm=settings.token_algorithm)


def create_admin_token(username: str, settings: Settings):
    return create_access_token(
        {"sub": username, "role": Role.ADMIN.value},
        settings,
        timedelta(hours=settings.admin_token_expire_hours),
    )


def decode_principal(token: Optional[str], settings: Settings) -> Optional[Principal]:
    """Verify a bearer token; None when missing, expired or malformed."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token, settings.token_signing_key, algorithms=[settings.token_algorithm]
        )
    except JWTError:
        return None
    subject = payload.get("sub")
    role = payload.get("role", Role.LANDLORD.value)
    if subject is None or role not in {r.value for r in Role}:
        return None
    return Principal(subject=subject, role=role, account_id=payload.get("uid"))


def get_optional_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> Optional[Principal]:
    return decode_principal(token, settings)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    principal = decode_principal(token, settings)
    if principal is None or principal.role != Role.LANDLORD:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    user = db.query(User).filter_by(email=principal.subject).first()
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    if user.is_banned or not user.is_active:
        raise HTTPException(status_code=403, detail=f"Account is {user.status.value}")

    return user


@lru_cache
def _email_service():
    return EmailService(get_settings())


def get_mail_sender():
    return _email_service()


def get_dispatch_gateway(mail_sender=Depends(get_mail_sender)) -> DispatchGateway:
    return DispatchGateway(mail_sender)


def get_now() -> datetime:
    """Clock used for lease classification; overridable in tests."""
    return datetime.now()
