import logging
from dataclasses import dataclass
from typing import Optional

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType

from leasekeeper.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailResult:
    success: bool
    error: Optional[str] = None


class EmailService:
    """SMTP mail sender; the only component that talks to the mail server."""

    def __init__(self, settings: Settings):
        try:
            self.config = ConnectionConfig(
                MAIL_USERNAME=settings.mail_username,
                MAIL_PASSWORD=settings.mail_api_key,
                MAIL_FROM=settings.email_from,
                MAIL_PORT=settings.email_port,
                MAIL_SERVER=settings.email_server,
                MAIL_FROM_NAME=settings.email_from_name,
                MAIL_STARTTLS=settings.email_starttls,
                MAIL_SSL_TLS=settings.email_ssl_tls,
                USE_CREDENTIALS=bool(settings.mail_api_key),
                VALIDATE_CERTS=settings.email_ssl_tls or settings.email_starttls,
            )
            self.mailer = FastMail(self.config)
        except Exception as e:
            raise Exception(f"Failed to initialize email service: {str(e)}")

    async def send_email(self, to: str, subject: str, html: str) -> MailResult:
        """Send one HTML email and report the outcome instead of raising."""
        message = MessageSchema(
            subject=subject,
            recipients=[to],
            body=html,
            subtype=MessageType.html,
        )
        try:
            await self.mailer.send_message(message)
        except Exception as e:
            logger.warning("Email to %s failed: %s", to, e)
            return MailResult(success=False, error=str(e))
        return MailResult(success=True)
