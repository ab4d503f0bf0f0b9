"""Suspend, reactivate and unlock with fire-and-forget side effects."""
from datetime import datetime, timedelta, timezone

import pytest

from citizen_portal.core.config import EmailSettings
from citizen_portal.modules.accounts import AccountAdminService, AccountStateError
from citizen_portal.modules.accounts.models import Account, AccountStatus
from citizen_portal.modules.audit import AuditAction, AuditContext, AuditService
from citizen_portal.modules.notifications import Mailer, NotificationService, NotificationType
from citizen_portal.modules.notifications.mailer import welcome_email

from .fakes import (
    FakeAccountRepository,
    FakeAuditRepository,
    FakeNotificationRepository,
    RecordingMailer,
)

CONTEXT = AuditContext(actor_id="admin-1", ip_address="10.0.0.1", user_agent="pytest")


def build_service(audit_fail: bool = False, mail_fail: bool = False):
    accounts = FakeAccountRepository()
    accounts.add(
        Account(
            id="acc-1",
            email="citizen@example.com",
            first_name="Ada",
            last_name="Lovelace",
            role="CITIZEN",
            is_active=True,
            password_hash="hash",
        )
    )
    audit = FakeAuditRepository(fail=audit_fail)
    notifications = FakeNotificationRepository()
    mailer = RecordingMailer(fail=mail_fail)
    service = AccountAdminService(
        accounts,
        AuditService(audit),
        NotificationService(notifications, mailer),
    )
    return service, accounts, audit, notifications, mailer


async def test_suspend_sets_status_and_records_side_effects():
    service, accounts, audit, notifications, mailer = build_service()

    account = await service.suspend("acc-1", reason="Fraudulent documents", context=CONTEXT)

    assert account.status == AccountStatus.SUSPENDED.value
    assert audit.entries[0].action == AuditAction.USER_SUSPENDED.value
    assert audit.entries[0].details == {"status": "SUSPENDED", "reason": "Fraudulent documents"}
    assert audit.entries[0].ip_address == "10.0.0.1"
    assert notifications.notifications[0].type == NotificationType.ACCOUNT_UPDATE.value
    assert mailer.sent[0][0] == "citizen@example.com"
    assert "Fraudulent documents" in mailer.sent[0][1].body


async def test_suspend_twice_is_rejected():
    service, *_ = build_service()
    await service.suspend("acc-1", reason="first", context=CONTEXT)

    with pytest.raises(AccountStateError, match="already suspended"):
        await service.suspend("acc-1", reason="second", context=CONTEXT)


async def test_reactivate_requires_a_suspended_account():
    service, *_ = build_service()

    with pytest.raises(AccountStateError, match="not suspended"):
        await service.reactivate("acc-1", reason=None, context=CONTEXT)


async def test_reactivate_restores_active_status():
    service, accounts, audit, *_ = build_service()
    await service.suspend("acc-1", reason="review", context=CONTEXT)

    account = await service.reactivate("acc-1", reason=None, context=CONTEXT)

    assert account.status == AccountStatus.ACTIVE.value
    assert audit.entries[-1].action == AuditAction.USER_REACTIVATED.value
    assert audit.entries[-1].details["reason"] == "No reason provided"


async def test_side_effect_failures_do_not_fail_the_status_change():
    service, accounts, audit, notifications, mailer = build_service(audit_fail=True, mail_fail=True)

    account = await service.suspend("acc-1", reason="abuse", context=CONTEXT)

    assert account.status == AccountStatus.SUSPENDED.value
    assert accounts.accounts["acc-1"].status == AccountStatus.SUSPENDED.value
    assert audit.entries == []
    assert len(notifications.notifications) == 1


async def test_unlock_clears_counters():
    service, accounts, audit, *_ = build_service()
    accounts.accounts["acc-1"].failed_login_attempts = 5
    accounts.accounts["acc-1"].lockout_until = datetime.now(timezone.utc) + timedelta(minutes=10)

    account = await service.unlock("acc-1", context=CONTEXT)

    assert account.failed_login_attempts == 0
    assert account.lockout_until is None
    assert audit.entries[0].action == AuditAction.ACCOUNT_UNLOCKED.value


async def test_unconfigured_mailer_skips_delivery():
    mailer = Mailer(EmailSettings())

    assert not mailer.is_configured
    assert await mailer.send("citizen@example.com", welcome_email("Ada")) is False
