"""In-app notifications and outbound email."""

from .exceptions import NotificationError, NotificationNotFoundError
from .mailer import EmailContent, Mailer
from .models import Notification, NotificationType
from .repository import NotificationRepository
from .service import NotificationService, Recipient

__all__ = [
    "EmailContent",
    "Mailer",
    "Notification",
    "NotificationError",
    "NotificationNotFoundError",
    "NotificationRepository",
    "NotificationService",
    "NotificationType",
    "Recipient",
]
