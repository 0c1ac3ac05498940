import logging
from typing import Protocol

from leasekeeper.enums.notification_channel import NotificationChannel
from leasekeeper.exceptions import InvalidChannelError
from leasekeeper.schemas.notification_schema import DispatchResult, NotificationRequest
from leasekeeper.services.email_service import MailResult

logger = logging.getLogger(__name__)

SMS_PLACEHOLDER = "SMS notification would be sent here"


class MailSender(Protocol):
    async def send_email(self, to: str, subject: str, html: str) -> MailResult:
        ...


class DispatchGateway:
    """
    Sends already-rendered notifications over email or SMS.

    Email goes to the mail sender and its outcome is returned as is. SMS has
    no provider yet and answers with a success-shaped placeholder so reminder
    flows never block on it. One attempt per call; retrying is up to the caller.
    """

    def __init__(self, mail_sender: MailSender):
        self.mail_sender = mail_sender

    @staticmethod
    def resolve_channel(channel) -> NotificationChannel:
        try:
            return NotificationChannel(channel)
        except ValueError:
            raise InvalidChannelError(channel)

    async def send(self, request: NotificationRequest) -> DispatchResult:
        channel = self.resolve_channel(request.channel)

        if channel is NotificationChannel.SMS:
            return DispatchResult(
                success=True,
                channel=channel.value,
                to=request.to,
                message=SMS_PLACEHOLDER,
            )

        try:
            outcome = await self.mail_sender.send_email(request.to, request.subject, request.body)
        except Exception as exc:
            logger.warning("Dispatch to %s raised: %s", request.to, exc)
            return DispatchResult(
                success=False, channel=channel.value, to=request.to, error=str(exc)
            )

        if not outcome.success:
            logger.warning("Dispatch to %s failed: %s", request.to, outcome.error)
            return DispatchResult(
                success=False, channel=channel.value, to=request.to, error=outcome.error
            )

        logger.debug("Dispatched email to %s", request.to)
        return DispatchResult(success=True, channel=channel.value, to=request.to, message="sent")
