import asyncio
from datetime import datetime, timezone

import pytest

from leasekeeper.enums.account_status import AccountStatus
from leasekeeper.exceptions import ValidationError
from leasekeeper.schemas.appeal_schema import AppealCreate
from leasekeeper.services.appeal_service import (
    AppealService,
    render_admin_email,
    render_confirmation_email,
)
from leasekeeper.services.dispatch_service import DispatchGateway
from leasekeeper.utils.id_generator import generate_appeal_id

ADMIN_ADDRESS = "admin@example.com"
SUBMITTED_AT = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def appeals(settings, mail_sender):
    return AppealService(settings, DispatchGateway(mail_sender))


def _appeal(**overrides):
    fields = dict(
        name="Jane Landlord",
        email="jane@example.com",
        phone="+15550001111",
        reason="Mistaken identity",
        message="Please review my account.",
        account_status=AccountStatus.BANNED,
        submitted_at=SUBMITTED_AT,
    )
    fields.update(overrides)
    return AppealCreate(**fields)


def test_notifies_admin_and_appellant(appeals, mail_sender):
    before = int(datetime.now(timezone.utc).timestamp() * 1000)

    receipt = asyncio.run(appeals.submit_appeal(_appeal()))

    assert int(receipt.appeal_id.split("_")[1]) >= before
    assert receipt.estimated_response == "24-48 hours"
    assert [r.to for r in receipt.dispatch_results] == [ADMIN_ADDRESS, "jane@example.com"]
    assert all(r.success for r in receipt.dispatch_results)
    assert sorted(m["to"] for m in mail_sender.sent) == sorted([ADMIN_ADDRESS, "jane@example.com"])


@pytest.mark.parametrize("field", ["name", "email", "message"])
@pytest.mark.parametrize("blank", ["", "   "])
def test_missing_required_field_sends_nothing(appeals, mail_sender, field, blank):
    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(appeals.submit_appeal(_appeal(**{field: blank})))

    assert exc_info.value.field == field
    assert mail_sender.sent == []


def test_admin_mail_failure_does_not_fail_the_appeal(appeals, mail_sender):
    mail_sender.explode.add(ADMIN_ADDRESS)

    receipt = asyncio.run(appeals.submit_appeal(_appeal()))

    admin_result, user_result = receipt.dispatch_results
    assert admin_result.success is False
    assert user_result.success is True
    assert receipt.appeal_id.startswith("APPEAL_")


def test_both_mails_failing_still_returns_a_receipt(appeals, mail_sender):
    mail_sender.reject.update({ADMIN_ADDRESS, "jane@example.com"})

    receipt = asyncio.run(appeals.submit_appeal(_appeal()))

    assert [r.success for r in receipt.dispatch_results] == [False, False]


def test_receipt_id_ignores_client_timestamp(appeals):
    first = asyncio.run(appeals.submit_appeal(_appeal()))
    second = asyncio.run(appeals.submit_appeal(_appeal()))

    assert first.appeal_id != second.appeal_id
    assert first.appeal_id != f"APPEAL_{int(SUBMITTED_AT.timestamp() * 1000)}"


def test_ids_for_the_same_instant_keep_increasing():
    first = generate_appeal_id(SUBMITTED_AT)
    second = generate_appeal_id(SUBMITTED_AT)

    assert int(second.split("_")[1]) > int(first.split("_")[1])


def test_client_timestamp_is_shown_in_the_emails(appeals, mail_sender):
    asyncio.run(appeals.submit_appeal(_appeal()))

    assert all("2024-06-01 12:00:00" in m["html"] for m in mail_sender.sent)


def test_submitted_at_defaults_to_now(appeals, mail_sender):
    asyncio.run(appeals.submit_appeal(_appeal(submitted_at=None)))

    assert all(str(datetime.now(timezone.utc).year) in m["html"] for m in mail_sender.sent)


class TestRendering:
    def test_banned_appeal_is_an_unban_request(self):
        subject, html = render_admin_email(_appeal(), SUBMITTED_AT)
        assert subject == "🚨 Account Unban Appeal - Jane Landlord"
        assert "BANNED" in html
        assert "unban" in html

    def test_deleted_appeal_is_a_recovery_request(self):
        appeal = _appeal(account_status=AccountStatus.DELETED)
        admin_subject, admin_html = render_admin_email(appeal, SUBMITTED_AT)
        user_subject, user_html = render_confirmation_email(appeal, SUBMITTED_AT)
        assert "Recovery" in admin_subject
        assert user_subject == "Appeal Submitted - Account Recovery Request"
        assert "restored" in user_html
        assert "DELETED" in admin_html

    def test_user_content_is_escaped(self):
        appeal = _appeal(message="<script>alert(1)</script>")
        _, html = render_admin_email(appeal, SUBMITTED_AT)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_optional_fields_have_placeholders(self):
        _, html = render_admin_email(_appeal(phone=None, reason=None), SUBMITTED_AT)
        assert "Not provided" in html
        assert "Not specified" in html
