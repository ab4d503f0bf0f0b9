"""
Bootstrap the default administrator account.

Credentials come from ADMIN_EMAIL / ADMIN_PASSWORD when set; the fallback
password must be changed after the first login.
"""
import asyncio
import os

from sqlalchemy import select

from citizen_portal.core.config import get_settings
from citizen_portal.core.logging_config import configure_logging
from citizen_portal.db.models import Account
from citizen_portal.infrastructure.database import get_session, init_db
from citizen_portal.modules.accounts import AccountCreateInput, AccountService, Role

DEFAULT_EMAIL = "admin@citizen-portal.example.com"
DEFAULT_PASSWORD = "Admin@12345"


async def create_default_admin() -> None:
    """Create the admin account unless one already exists."""
    settings = get_settings()
    configure_logging(settings)
    await init_db()

    async for db in get_session():
        stmt = select(Account).where(Account.role == Role.ADMIN.value).limit(1)
        result = await db.execute(stmt)
        if result.scalar_one_or_none() is not None:
            print("Admin account already exists, nothing to do")
            return

        email = os.getenv("ADMIN_EMAIL", DEFAULT_EMAIL)
        password = os.getenv("ADMIN_PASSWORD", DEFAULT_PASSWORD)

        service = AccountService.with_session(db, settings)
        await service.register(
            AccountCreateInput(
                email=email,
                password=password,
                first_name="System",
                last_name="Administrator",
                role=Role.ADMIN.value,
            )
        )
        await db.commit()

        print("=" * 50)
        print("Default admin account created")
        print("=" * 50)
        print(f"Email: {email}")
        if password == DEFAULT_PASSWORD:
            print(f"Password: {password}")
            print("Change this password right after the first login!")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
