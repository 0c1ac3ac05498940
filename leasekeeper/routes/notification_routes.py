import logging
from fastapi import APIRouter, Depends

from leasekeeper.database.models.user_model import User
from leasekeeper.exceptions import DispatchFailureError, LeaseKeeperError
from leasekeeper.schemas.notification_schema import NotificationRequest
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.services.reminder_service import ReminderService
from leasekeeper.utils.dependencies import get_current_user, get_dispatch_gateway
from leasekeeper.responses.success import data_response
from leasekeeper.responses.error import error_from_exception, internal_server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("/send")
async def send_notification(
    payload: NotificationRequest,
    current_user: User = Depends(get_current_user),
    gateway: DispatchGateway = Depends(get_dispatch_gateway),
):
    """Send a reminder the client has already rendered."""
    try:
        result = await ReminderService(gateway).send_reminder(payload)
        if not result.success:
            return error_from_exception(DispatchFailureError(payload.to, result.error or "unknown error"))
        return data_response(result)
    except LeaseKeeperError as e:
        return error_from_exception(e)
    except Exception:
        logger.exception("Notification error")
        return internal_server_error("Error sending notification")
