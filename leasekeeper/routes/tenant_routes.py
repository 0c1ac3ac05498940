import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leasekeeper.database.init import get_db
from leasekeeper.database.models.user_model import User
from leasekeeper.exceptions import LeaseKeeperError
from leasekeeper.schemas.tenant_schema import (
    PaymentRecord,
    TenancyAmend,
    TenantCreate,
    TenantResponse,
)
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.services.reminder_service import ReminderService
from leasekeeper.services.tenant_service import TenantService
from leasekeeper.utils.dependencies import get_current_user, get_dispatch_gateway, get_now
from leasekeeper.responses.success import created_response, data_response
from leasekeeper.responses.error import error_from_exception, internal_server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["Tenants"])

tenant_service = TenantService()


def get_reminder_service(
    gateway: DispatchGateway = Depends(get_dispatch_gateway),
) -> ReminderService:
    return ReminderService(gateway, tenant_service)


@router.get("")
def get_my_tenants(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tenants = tenant_service.get_tenants_by_landlord(db, current_user.id)
        return data_response([TenantResponse.model_validate(t) for t in tenants])
    except Exception:
        logger.exception("Error fetching tenants for %s", current_user.id)
        return internal_server_error("Error fetching tenants")


@router.post("")
def create_new_tenant(
    payload: TenantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Registers a tenancy on one of the current landlord's properties."""
    try:
        tenant = tenant_service.create_tenant(db, payload, current_user.id)
        return created_response(TenantResponse.model_validate(tenant))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Tenant creation error")
        return internal_server_error("Error creating tenant")


@router.get("/calendar")
def get_calendar(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
    now: datetime = Depends(get_now),
):
    try:
        return data_response(reminders.calendar(db, current_user.id, now))
    except Exception:
        logger.exception("Calendar data error")
        return internal_server_error("Error fetching calendar data")


@router.get("/dashboard")
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    reminders: ReminderService = Depends(get_reminder_service),
    now: datetime = Depends(get_now),
):
    try:
        return data_response(reminders.dashboard(db, current_user.id, now))
    except Exception:
        logger.exception("Dashboard data error")
        return internal_server_error("Error fetching dashboard data")


@router.get("/{tenant_id}")
def get_tenant_by_id(
    tenant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tenant = tenant_service.get_owned_tenant(db, current_user.id, tenant_id)
        return data_response(TenantResponse.model_validate(tenant))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error fetching tenant %s", tenant_id)
        return internal_server_error("Error fetching tenant")


@router.post("/{tenant_id}/payments")
def record_payment(
    tenant_id: int,
    payload: PaymentRecord,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tenant = tenant_service.get_owned_tenant(db, current_user.id, tenant_id)
        tenant = tenant_service.record_payment(db, tenant, payload.paid_on)
        return data_response(TenantResponse.model_validate(tenant))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error recording payment for tenant %s", tenant_id)
        return internal_server_error("Error recording payment")


@router.patch("/{tenant_id}/amend")
def amend_tenant(
    tenant_id: int,
    payload: TenancyAmend,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tenant = tenant_service.get_owned_tenant(db, current_user.id, tenant_id)
        tenant = tenant_service.amend_tenant(db, tenant, payload)
        return data_response(TenantResponse.model_validate(tenant))
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Error amending tenant %s", tenant_id)
        return internal_server_error("Error amending tenant")
