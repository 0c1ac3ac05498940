import asyncio

import pytest

from leasekeeper.exceptions import InvalidChannelError, ValidationError
from leasekeeper.schemas.notification_schema import NotificationRequest
from leasekeeper.services.dispatch_service import SMS_PLACEHOLDER, DispatchGateway


def _send(gateway, **kwargs):
    return asyncio.run(gateway.send(NotificationRequest(**kwargs)))


def test_email_success(mail_sender):
    result = _send(
        DispatchGateway(mail_sender),
        to="tenant@example.com",
        subject="Rent due",
        body="<p>Rent is due</p>",
    )

    assert result.success is True
    assert result.channel == "email"
    assert result.to == "tenant@example.com"
    assert mail_sender.sent == [
        {"to": "tenant@example.com", "subject": "Rent due", "html": "<p>Rent is due</p>"}
    ]


def test_email_rejected_by_mail_server(mail_sender):
    mail_sender.reject.add("bounce@example.com")

    result = _send(DispatchGateway(mail_sender), to="bounce@example.com", subject="s", body="b")

    assert result.success is False
    assert result.error == "550 mailbox unavailable"


def test_email_sender_raising_becomes_failure(mail_sender):
    mail_sender.explode.add("down@example.com")

    result = _send(DispatchGateway(mail_sender), to="down@example.com", subject="s", body="b")

    assert result.success is False
    assert "unreachable" in result.error


def test_sms_returns_placeholder(mail_sender):
    result = _send(DispatchGateway(mail_sender), to="+15551234567", body="Rent due", channel="sms")

    assert result.success is True
    assert result.channel == "sms"
    assert result.message == SMS_PLACEHOLDER
    assert mail_sender.sent == []


@pytest.mark.parametrize("channel", ["fax", "EMAIL", ""])
def test_unknown_channel_sends_nothing(mail_sender, channel):
    with pytest.raises(InvalidChannelError) as exc_info:
        _send(DispatchGateway(mail_sender), to="x@example.com", channel=channel)

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.status_code == 400
    assert mail_sender.sent == []
