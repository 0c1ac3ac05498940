import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leasekeeper.config import Settings, get_settings
from leasekeeper.database.init import get_db
from leasekeeper.database.models.user_model import User
from leasekeeper.enums.role import Role
from leasekeeper.schemas.auth_schema import LoginRequest, UserCreate, UserResponse
from leasekeeper.services.auth_service import (
    authenticate_user,
    create_user,
    get_user_by_email,
)
from leasekeeper.utils.dependencies import create_access_token, get_current_user
from leasekeeper.responses.success import data_response, created_response
from leasekeeper.responses.error import (
    unauthorized_error,
    conflict_error,
    forbidden_error,
    internal_server_error,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_payload(user: User, settings: Settings) -> dict:
    token = create_access_token(
        {"sub": user.email, "role": Role.LANDLORD.value, "uid": user.id}, settings
    )
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": UserResponse.model_validate(user),
    }


@router.post("/signup")
def signup(
    payload: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    existing = get_user_by_email(payload.email, db)
    if existing:
        return conflict_error("User already exists")

    try:
        user = create_user(payload, db)
        return created_response(_token_payload(user, settings))
    except Exception as e:
        logger.exception("Signup failed for %s", payload.email)
        return internal_server_error(f"Failed to register user: {str(e)}")


@router.post("/signin")
def signin(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        user = authenticate_user(credentials.email, credentials.password, db)
        if not user:
            return unauthorized_error("Invalid credentials")
        if user.is_banned or not user.is_active:
            # The client shows the appeal form for banned accounts
            return forbidden_error(f"Account is {user.status.value}")

        return data_response(_token_payload(user, settings))
    except Exception as e:
        logger.exception("Signin failed")
        return internal_server_error(str(e))


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    """Route for any authenticated landlord to get their own information"""
    return data_response(UserResponse.model_validate(current_user))
