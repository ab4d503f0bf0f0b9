"""Signed, time-limited access tokens (JWT)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from citizen_portal.core.config import Settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
EMAIL_VERIFICATION_TOKEN = "email_verification"

# Expiry values accepted from configuration. Anything else is a configuration error.
ALLOWED_EXPIRES_IN: dict[str, timedelta] = {
    "1s": timedelta(seconds=1),
    "5s": timedelta(seconds=5),
    "10s": timedelta(seconds=10),
    "30s": timedelta(seconds=30),
    "1m": timedelta(minutes=1),
    "5m": timedelta(minutes=5),
    "10m": timedelta(minutes=10),
    "30m": timedelta(minutes=30),
    "1h": timedelta(hours=1),
    "2h": timedelta(hours=2),
    "6h": timedelta(hours=6),
    "12h": timedelta(hours=12),
    "1d": timedelta(days=1),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}


class TokenConfigurationError(RuntimeError):
    """Raised when the signing secret or expiry setting is unusable."""


class TokenError(Exception):
    """Base class for rejected tokens."""


class InvalidTokenError(TokenError):
    """Signature, structure or token type did not check out."""


class TokenExpiredError(TokenError):
    """Token was valid but its ``exp`` has passed."""


@dataclass(slots=True)
class TokenIssuer:
    secret: Optional[str]
    expires_in: str = "7d"
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.security.jwt_secret,
            expires_in=settings.security.jwt_expires_in,
            algorithm=settings.security.jwt_algorithm,
        )

    def validate(self) -> timedelta:
        """Return the configured lifetime, raising if the configuration cannot sign tokens."""
        if not self.secret:
            logger.error("JWT secret is not defined")
            raise TokenConfigurationError("JWT secret is not defined")
        lifetime = ALLOWED_EXPIRES_IN.get(self.expires_in)
        if lifetime is None:
            logger.error(
                "Invalid JWT expiry format: %s. Must be one of: %s",
                self.expires_in,
                ", ".join(ALLOWED_EXPIRES_IN),
            )
            raise TokenConfigurationError(f"Invalid JWT expiry format: {self.expires_in}")
        return lifetime

    def issue(
        self,
        account_id: str,
        *,
        token_type: str = ACCESS_TOKEN,
        now: Optional[datetime] = None,
    ) -> str:
        lifetime = self.validate()
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": account_id,
            "typ": token_type,
            "iat": issued_at,
            "exp": issued_at + lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str, *, token_type: str = ACCESS_TOKEN) -> str:
        """Return the account id carried by ``token``."""
        if not self.secret:
            logger.error("JWT secret is not defined")
            raise TokenConfigurationError("JWT secret is not defined")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except JWTError as exc:
            raise InvalidTokenError("Invalid token") from exc

        account_id = payload.get("sub")
        if not account_id or payload.get("typ") != token_type:
            raise InvalidTokenError("Invalid token")
        return account_id


__all__ = [
    "ACCESS_TOKEN",
    "ALLOWED_EXPIRES_IN",
    "EMAIL_VERIFICATION_TOKEN",
    "InvalidTokenError",
    "TokenConfigurationError",
    "TokenError",
    "TokenExpiredError",
    "TokenIssuer",
]
