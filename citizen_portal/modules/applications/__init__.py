"""Citizen service applications (identification letters, certificates, registrations)."""

from .exceptions import ApplicationError, ApplicationNotFoundError, ReferenceAllocationError
from .models import Application, ApplicationStatus, ServiceType
from .reference import generate_reference_number, generate_unique
from .service import ApplicationService

__all__ = [
    "Application",
    "ApplicationError",
    "ApplicationNotFoundError",
    "ApplicationService",
    "ApplicationStatus",
    "ReferenceAllocationError",
    "ServiceType",
    "generate_reference_number",
    "generate_unique",
]
