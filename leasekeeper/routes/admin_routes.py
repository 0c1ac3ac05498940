import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leasekeeper.config import Settings, get_settings
from leasekeeper.database.init import get_db
from leasekeeper.exceptions import LeaseKeeperError
from leasekeeper.schemas.admin_schema import DeletionAck, ModerationRequest
from leasekeeper.schemas.appeal_schema import AppealCreate
from leasekeeper.schemas.auth_schema import AdminLoginRequest, Principal, UserResponse
from leasekeeper.services.appeal_service import AppealService
from leasekeeper.services.auth_service import authenticate_admin
from leasekeeper.services.cascade_service import CascadeReport
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.services.moderation_service import ModerationService
from leasekeeper.utils.dependencies import (
    create_admin_token,
    get_dispatch_gateway,
    get_optional_principal,
)
from leasekeeper.responses.success import data_response, success_response
from leasekeeper.responses.error import (
    error_from_exception,
    internal_server_error,
    unauthorized_error,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_moderation_service(settings: Settings = Depends(get_settings)) -> ModerationService:
    return ModerationService(settings)


def get_appeal_service(
    settings: Settings = Depends(get_settings),
    gateway: DispatchGateway = Depends(get_dispatch_gateway),
) -> AppealService:
    return AppealService(settings, gateway)


@router.post("/login")
def admin_login(
    credentials: AdminLoginRequest, settings: Settings = Depends(get_settings)
):
    if not authenticate_admin(credentials.username, credentials.password, settings):
        return unauthorized_error("Invalid credentials")
    token = create_admin_token(credentials.username, settings)
    return success_response(
        "Admin login successful", {"access_token": token, "token_type": "bearer"}
    )


@router.get("/users")
def list_users(
    db: Session = Depends(get_db),
    principal: Optional[Principal] = Depends(get_optional_principal),
    moderation: ModerationService = Depends(get_moderation_service),
):
    try:
        users = moderation.list_accounts(db, principal)
        return data_response([UserResponse.model_validate(u) for u in users])
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error fetching users")
        return internal_server_error("Error fetching users")


@router.put("/users")
def moderate_user(
    payload: ModerationRequest,
    db: Session = Depends(get_db),
    principal: Optional[Principal] = Depends(get_optional_principal),
    moderation: ModerationService = Depends(get_moderation_service),
):
    """Ban, unban or delete an account."""
    try:
        outcome = moderation.apply(db, principal, payload.user_id, payload.action)
        if isinstance(outcome, CascadeReport):
            return data_response(_deletion_ack(payload.user_id, outcome))
        return data_response(UserResponse.model_validate(outcome))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error updating user %s", payload.user_id)
        return internal_server_error("Error updating user")


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Optional[Principal] = Depends(get_optional_principal),
    moderation: ModerationService = Depends(get_moderation_service),
):
    try:
        report = moderation.delete(db, principal, user_id)
        return data_response(_deletion_ack(user_id, report))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error deleting user %s", user_id)
        return internal_server_error("Error deleting user")


@router.post("/appeal")
async def submit_appeal(
    payload: AppealCreate,
    appeals: AppealService = Depends(get_appeal_service),
):
    """Public endpoint for banned or deleted landlords asking for review."""
    try:
        receipt = await appeals.submit_appeal(payload)
        return success_response(receipt.message, receipt)
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Appeal submission error")
        return internal_server_error("Failed to submit appeal. Please try again.")


def _deletion_ack(user_id: int, report: CascadeReport) -> DeletionAck:
    return DeletionAck(
        user_id=user_id,
        message="User deleted successfully",
        properties_deleted=report.properties_deleted,
        tenancies_deleted=report.tenancies_deleted,
    )
