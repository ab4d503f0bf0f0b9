"""Login orchestration against in-memory repositories with a controllable clock."""
from datetime import datetime, timedelta, timezone

import pytest

from citizen_portal.core.crypto import PasswordHasher, decoy_hash, hash_password
from citizen_portal.core.tokens import TokenIssuer
from citizen_portal.modules.accounts import (
    AccountDeactivatedError,
    AccountLockedError,
    AccountSuspendedError,
    AuthenticationService,
    InvalidCredentialsError,
    LockoutPolicy,
)
from citizen_portal.modules.accounts.models import Account, AccountStatus

from .fakes import FakeAccountRepository

PASSWORD = "Str0ng!Pass"
PASSWORD_HASH = hash_password(PASSWORD, rounds=4)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository() -> FakeAccountRepository:
    return FakeAccountRepository()


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(secret="unit-test-secret", expires_in="7d")


@pytest.fixture
def service(repository, issuer, clock) -> AuthenticationService:
    return AuthenticationService(repository, PasswordHasher(rounds=4), issuer, LockoutPolicy(), clock=clock)


def add_account(repository: FakeAccountRepository, **overrides) -> Account:
    fields = dict(
        id="acc-1",
        email="citizen@example.com",
        first_name="Ada",
        last_name="Lovelace",
        role="CITIZEN",
        is_active=True,
        password_hash=PASSWORD_HASH,
    )
    fields.update(overrides)
    return repository.add(Account(**fields))


async def test_unknown_email_and_wrong_password_share_one_message(service, repository):
    add_account(repository)

    with pytest.raises(InvalidCredentialsError) as unknown:
        await service.login("nobody@example.com", PASSWORD)
    with pytest.raises(InvalidCredentialsError) as wrong:
        await service.login("citizen@example.com", "wrong-password")

    assert str(unknown.value) == str(wrong.value) == "Invalid email or password"


async def test_unknown_email_touches_nothing(service, repository):
    with pytest.raises(InvalidCredentialsError):
        await service.login("nobody@example.com", PASSWORD)

    assert repository.updates == []


class CountingHasher(PasswordHasher):
    def __init__(self) -> None:
        super().__init__(rounds=4)
        self.checked: list[str] = []

    async def verify(self, plain_password: str, hashed_password: str) -> bool:
        self.checked.append(hashed_password)
        return await super().verify(plain_password, hashed_password)


async def test_unknown_email_still_pays_for_a_bcrypt_check(repository, issuer, clock):
    hasher = CountingHasher()
    service = AuthenticationService(repository, hasher, issuer, LockoutPolicy(), clock=clock)

    with pytest.raises(InvalidCredentialsError):
        await service.login("nobody@example.com", PASSWORD)

    assert len(hasher.checked) == 1
    assert hasher.checked[0].startswith("$2b$04$")
    assert hasher.checked[0] == decoy_hash(4)


async def test_email_lookup_is_case_insensitive(service, repository):
    add_account(repository)

    result = await service.login("  Citizen@Example.COM ", PASSWORD)

    assert result.account.id == "acc-1"


async def test_wrong_password_increments_counter(service, repository):
    add_account(repository)

    with pytest.raises(InvalidCredentialsError):
        await service.login("citizen@example.com", "wrong-password")

    stored = repository.accounts["acc-1"]
    assert stored.failed_login_attempts == 1
    assert stored.lockout_until is None


async def test_fifth_failure_locks_but_reports_invalid_credentials(service, repository, clock):
    add_account(repository)

    for _ in range(4):
        with pytest.raises(InvalidCredentialsError):
            await service.login("citizen@example.com", "wrong-password")
    with pytest.raises(InvalidCredentialsError):
        await service.login("citizen@example.com", "wrong-password")

    stored = repository.accounts["acc-1"]
    assert stored.failed_login_attempts == 5
    assert stored.lockout_until == clock.now + timedelta(minutes=15)

    with pytest.raises(AccountLockedError):
        await service.login("citizen@example.com", "wrong-password")


async def test_locked_account_rejects_correct_password_without_changes(service, repository, clock):
    until = clock.now + timedelta(minutes=10)
    add_account(repository, failed_login_attempts=5, lockout_until=until)

    with pytest.raises(AccountLockedError) as exc_info:
        await service.login("citizen@example.com", PASSWORD)

    assert "Account is locked" in exc_info.value.message
    assert exc_info.value.locked_until == until
    assert exc_info.value.retry_after == 600
    assert repository.updates == []
    assert repository.accounts["acc-1"].failed_login_attempts == 5


async def test_failures_while_locked_never_extend_the_lock(service, repository, clock):
    until = clock.now + timedelta(minutes=10)
    add_account(repository, failed_login_attempts=5, lockout_until=until)

    for _ in range(3):
        clock.advance(minutes=1)
        with pytest.raises(AccountLockedError) as exc_info:
            await service.login("citizen@example.com", "wrong-password")
        assert exc_info.value.retry_after == (until - clock.now).total_seconds()

    assert repository.accounts["acc-1"].lockout_until == until
    assert repository.updates == []


async def test_correct_password_after_expiry_succeeds_and_resets(service, repository, clock):
    add_account(repository, failed_login_attempts=5, lockout_until=clock.now + timedelta(minutes=15))
    clock.advance(minutes=15, seconds=1)

    result = await service.login("citizen@example.com", PASSWORD)

    stored = repository.accounts["acc-1"]
    assert stored.failed_login_attempts == 0
    assert stored.lockout_until is None
    assert stored.last_login_at == clock.now
    assert result.token
    assert len(repository.updates) == 1


async def test_success_resets_partial_failures(service, repository):
    add_account(repository, failed_login_attempts=3)

    await service.login("citizen@example.com", PASSWORD)

    assert repository.accounts["acc-1"].failed_login_attempts == 0


async def test_deactivated_account_is_rejected_without_mutation(service, repository):
    add_account(repository, is_active=False, failed_login_attempts=2)

    with pytest.raises(AccountDeactivatedError) as exc_info:
        await service.login("citizen@example.com", "wrong-password")

    assert exc_info.value.message.startswith("Account is deactivated")
    assert repository.updates == []
    assert repository.accounts["acc-1"].failed_login_attempts == 2


async def test_suspended_account_is_rejected_without_mutation(service, repository):
    add_account(repository, status=AccountStatus.SUSPENDED.value)

    with pytest.raises(AccountSuspendedError):
        await service.login("citizen@example.com", PASSWORD)

    assert repository.updates == []


async def test_issued_token_carries_the_account_id(service, repository, issuer):
    add_account(repository)

    result = await service.login("citizen@example.com", PASSWORD)

    assert issuer.decode(result.token) == "acc-1"
