"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from citizen_portal.core.config import Settings, get_settings
from citizen_portal.core.crypto import PasswordHasher, decoy_hash
from citizen_portal.core.tokens import TokenIssuer
from citizen_portal.infrastructure.database.session import get_engine
from citizen_portal.modules.accounts.lockout import LockoutPolicy
from citizen_portal.modules.notifications.mailer import Mailer


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    token_issuer: TokenIssuer
    hasher: PasswordHasher
    lockout_policy: LockoutPolicy
    mailer: Mailer

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationContainer":
        return cls(
            settings=settings,
            token_issuer=TokenIssuer.from_settings(settings),
            hasher=PasswordHasher(rounds=settings.security.bcrypt_rounds),
            lockout_policy=LockoutPolicy.from_settings(settings),
            mailer=Mailer.from_settings(settings),
        )

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons are initialised and token settings can sign."""
        get_engine()
        self.token_issuer.validate()
        decoy_hash(self.hasher.rounds)


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer.from_settings(get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
