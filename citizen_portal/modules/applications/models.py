"""Service application domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ServiceType(str, Enum):
    IDENTIFICATION_LETTER = "IDENTIFICATION_LETTER"
    BIRTH_CERTIFICATE = "BIRTH_CERTIFICATE"
    BUSINESS_REGISTRATION = "BUSINESS_REGISTRATION"
    VEHICLE_REGISTRATION = "VEHICLE_REGISTRATION"
    HEALTH_APPOINTMENT = "HEALTH_APPOINTMENT"

    @property
    def reference_prefix(self) -> str:
        return REFERENCE_PREFIXES[self]


REFERENCE_PREFIXES: dict[ServiceType, str] = {
    ServiceType.IDENTIFICATION_LETTER: "OLG-ID",
    ServiceType.BIRTH_CERTIFICATE: "OLG-BC",
    ServiceType.BUSINESS_REGISTRATION: "OLG-BR",
    ServiceType.VEHICLE_REGISTRATION: "OLG-VR",
    ServiceType.HEALTH_APPOINTMENT: "OLG-HA",
}


class ApplicationStatus(str, Enum):
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(slots=True)
class Application:
    id: str
    reference_number: str
    applicant_id: str
    service_type: str
    status: str
    details: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
