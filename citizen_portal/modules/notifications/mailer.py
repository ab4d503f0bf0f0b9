"""Outbound email over SMTP (aiosmtplib)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from email.message import EmailMessage

import aiosmtplib

from citizen_portal.core.config import EmailSettings, Settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EmailContent:
    subject: str
    body: str


@dataclass(slots=True)
class Mailer:
    settings: EmailSettings

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        return cls(settings.email)

    @property
    def sender(self) -> str | None:
        return self.settings.from_email or self.settings.smtp_username

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.smtp_host and self.sender)

    async def send(self, to_email: str, content: EmailContent) -> bool:
        """Send one message. Returns False instead of raising when delivery is not possible."""
        if not self.is_configured:
            logger.warning("Email not configured, skipping '%s' to %s", content.subject, to_email)
            return False

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to_email
        message["Subject"] = content.subject
        message.set_content(content.body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                username=self.settings.smtp_username,
                password=self.settings.smtp_password,
                start_tls=self.settings.use_tls,
                timeout=self.settings.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send '%s' to %s: %s", content.subject, to_email, exc)
            return False

        logger.info("Sent '%s' to %s", content.subject, to_email)
        return True


def welcome_email(first_name: str) -> EmailContent:
    return EmailContent(
        subject="Welcome to the Citizen Services Portal",
        body=(
            f"Hello {first_name},\n\n"
            "Your account has been created. You can now apply for local government services online.\n"
        ),
    )


def verification_email(first_name: str, verification_url: str) -> EmailContent:
    return EmailContent(
        subject="Verify your email address",
        body=(
            f"Hello {first_name},\n\n"
            f"Please confirm your email address by opening the link below:\n{verification_url}\n"
        ),
    )


def account_suspended_email(name: str, reason: str) -> EmailContent:
    return EmailContent(
        subject="Account Suspended",
        body=f"Hello {name},\n\nYour account has been suspended.\nReason: {reason}\n",
    )


def account_reactivated_email(name: str, reason: str) -> EmailContent:
    return EmailContent(
        subject="Account Reactivated",
        body=f"Hello {name},\n\nYour account has been reactivated.\nReason: {reason}\n",
    )
