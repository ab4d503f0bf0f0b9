"""
Citizen Portal - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set testing environment before the app reads its settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE__URL"] = "sqlite+aiosqlite:///./test_citizen_portal.db"
os.environ["SECURITY__JWT_SECRET"] = "test-jwt-secret-for-testing-only"
os.environ["SECURITY__JWT_EXPIRES_IN"] = "7d"
os.environ["SECURITY__BCRYPT_ROUNDS"] = "4"
os.environ["EMAIL__SMTP_HOST"] = ""

from citizen_portal.core.config import get_settings
from citizen_portal.core.crypto import PasswordHasher
from citizen_portal.core.tokens import TokenIssuer
from citizen_portal.db import models  # noqa: F401
from citizen_portal.infrastructure.database import Base
from citizen_portal.infrastructure.database.repositories import SqlAccountRepository
from citizen_portal.interfaces.http.deps import get_db_session
from citizen_portal.main import app
from citizen_portal.modules.accounts import Account, AccountCreateInput, AccountService, Role

from .fakes import DEFAULT_PASSWORD, fake

TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_citizen_portal.db"
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh database for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the test session injected."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(get_settings())


@pytest.fixture
def account_factory(db_session: AsyncSession) -> Callable:
    """Create persisted accounts: ``await account_factory(role="ADMIN", is_active=False)``."""

    async def create(
        *,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: str = Role.CITIZEN.value,
        **changes,
    ) -> Account:
        repository = SqlAccountRepository(db_session)
        service = AccountService(repository, PasswordHasher(rounds=4))
        account = await service.register(
            AccountCreateInput(
                email=email or fake.unique.email(),
                password=password,
                first_name="Ada",
                last_name="Lovelace",
                role=role,
            )
        )
        if changes:
            account = await repository.update_account(account.id, **changes)
        await db_session.commit()
        return account

    return create


@pytest.fixture
async def citizen(account_factory) -> Account:
    return await account_factory()


@pytest.fixture
async def admin(account_factory) -> Account:
    return await account_factory(role=Role.ADMIN.value)


@pytest.fixture
def auth_headers(token_issuer: TokenIssuer) -> Callable[[Account], dict]:
    def build(account: Account) -> dict:
        return {"Authorization": f"Bearer {token_issuer.issue(account.id)}"}

    return build
