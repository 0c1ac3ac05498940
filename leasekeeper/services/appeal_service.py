import asyncio
import logging
from datetime import datetime, timezone
from html import escape
from typing import Tuple

from leasekeeper.config import Settings
from leasekeeper.enums.account_status import AccountStatus
from leasekeeper.exceptions import ValidationError
from leasekeeper.schemas.appeal_schema import AppealCreate, AppealReceipt
from leasekeeper.schemas.notification_schema import DispatchResult, NotificationRequest
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.utils.id_generator import generate_appeal_id

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "message")


def _appeal_kind(appeal: AppealCreate) -> str:
    return "Unban" if appeal.account_status == AccountStatus.BANNED else "Recovery"


def render_admin_email(appeal: AppealCreate, submitted_at: datetime) -> Tuple[str, str]:
    kind = _appeal_kind(appeal)
    banned = appeal.account_status == AccountStatus.BANNED
    status = appeal.account_status.value.upper()
    subject = f"🚨 Account {kind} Appeal - {appeal.name}"
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #dc2626;">🚨 Account {kind} Appeal</h2>
        <h3>Appeal Details</h3>
        <p><strong>Account Status:</strong> {status}</p>
        <p><strong>Submitted:</strong> {submitted_at:%Y-%m-%d %H:%M:%S %Z}</p>
        <h3>User Information</h3>
        <p><strong>Name:</strong> {escape(appeal.name)}</p>
        <p><strong>Email:</strong> {escape(appeal.email)}</p>
        <p><strong>Phone:</strong> {escape(appeal.phone or 'Not provided')}</p>
        <p><strong>Reason:</strong> {escape(appeal.reason or 'Not specified')}</p>
        <h3>Appeal Message</h3>
        <p style="white-space: pre-wrap;">{escape(appeal.message)}</p>
        <h3>Admin Actions</h3>
        <ul>
            <li>Log into the admin dashboard to review the user's account</li>
            <li>Check the reason for the original {'ban' if banned else 'deletion'}</li>
            <li>Respond to the user within 24-48 hours</li>
            <li>If approved, {'unban' if banned else 'restore'} the account</li>
        </ul>
    </div>
    """
    return subject, html


def render_confirmation_email(appeal: AppealCreate, submitted_at: datetime) -> Tuple[str, str]:
    kind = _appeal_kind(appeal)
    banned = appeal.account_status == AccountStatus.BANNED
    status = appeal.account_status.value.upper()
    subject = f"Appeal Submitted - Account {kind} Request"
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #059669;">✅ Appeal Submitted Successfully</h2>
        <p>Dear {escape(appeal.name)},</p>
        <p>Thank you for submitting your account {kind.lower()} appeal. We have received
        your request and it is now under review.</p>
        <h3>Appeal Summary</h3>
        <p><strong>Account Status:</strong> {status}</p>
        <p><strong>Submitted:</strong> {submitted_at:%Y-%m-%d %H:%M:%S %Z}</p>
        <p><strong>Reason:</strong> {escape(appeal.reason or 'Not specified')}</p>
        <h3>What Happens Next?</h3>
        <ul>
            <li>Our admin team will review your appeal within 24-48 hours</li>
            <li>You will receive an email with our decision</li>
            <li>If approved, your account will be {'unbanned' if banned else 'restored'} immediately</li>
        </ul>
        <h3>Your Message</h3>
        <p style="white-space: pre-wrap; font-style: italic;">"{escape(appeal.message)}"</p>
        <p>Best regards,<br>LeaseKeeper Support Team</p>
    </div>
    """
    return subject, html


class AppealService:
    def __init__(self, settings: Settings, gateway: DispatchGateway):
        self.settings = settings
        self.gateway = gateway

    @staticmethod
    def validate(appeal: AppealCreate) -> None:
        for field in REQUIRED_FIELDS:
            if not (getattr(appeal, field) or "").strip():
                raise ValidationError(f"{field} is required", field=field)

    async def _dispatch(self, request: NotificationRequest) -> DispatchResult:
        try:
            result = await self.gateway.send(request)
        except Exception as exc:
            logger.warning("Appeal email to %s was not sent: %s", request.to, exc)
            return DispatchResult(success=False, channel=request.channel, to=request.to, error=str(exc))
        if not result.success:
            logger.warning("Appeal email to %s was not sent: %s", request.to, result.error)
        return result

    async def submit_appeal(self, appeal: AppealCreate) -> AppealReceipt:
        """
        Validate an appeal and notify both the admin and the appellant.

        The two emails are best-effort: their outcomes are collected on the
        receipt and never fail the submission.
        """
        self.validate(appeal)

        appeal_id = generate_appeal_id(datetime.now(timezone.utc))
        # Client time is only shown in the emails
        submitted_at = appeal.submitted_at or datetime.now(timezone.utc)

        admin_subject, admin_html = render_admin_email(appeal, submitted_at)
        user_subject, user_html = render_confirmation_email(appeal, submitted_at)
        admin_result, user_result = await asyncio.gather(
            self._dispatch(
                NotificationRequest(
                    to=self.settings.admin_notification_address,
                    subject=admin_subject,
                    body=admin_html,
                )
            ),
            self._dispatch(
                NotificationRequest(to=appeal.email, subject=user_subject, body=user_html)
            ),
        )

        logger.info(
            "Appeal %s submitted by %s (%s); admin notified: %s, confirmation sent: %s",
            appeal_id,
            appeal.email,
            appeal.account_status.value,
            admin_result.success,
            user_result.success,
        )
        return AppealReceipt(appeal_id=appeal_id, dispatch_results=[admin_result, user_result])
