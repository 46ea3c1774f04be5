"""Doctor Use Case DTOs"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Doctor


class AddDoctorCommand(BaseModel):
    """Doctor to add under the caller's clinic"""

    tenant_id: UUID
    user_id: Optional[UUID] = None
    name: str
    email: str
    specialization: str


class DoctorResponse(BaseModel):
    """Doctor as exposed over HTTP"""

    id: str
    tenant_id: str
    name: str
    email: str
    specialization: str
    is_deleted: bool
    created_at: datetime

    @classmethod
    def from_doctor(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            id=str(doctor.id),
            tenant_id=str(doctor.tenant_id),
            name=doctor.name,
            email=doctor.email,
            specialization=doctor.specialization,
            is_deleted=doctor.is_deleted,
            created_at=doctor.created_at,
        )


class AddDoctorResponse(BaseModel):
    """Created doctor plus the seat check that admitted it"""

    doctor: DoctorResponse
    plan_code: str
    seat_limit: int
    seats_used: Optional[int] = None  # Seats in use after this insert; None when unlimited
