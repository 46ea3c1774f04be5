from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.errors import ErrorCode
from .dtos import DoctorResponse


class ArchiveDoctorUseCase:
    """
    Archive a doctor, freeing its seat.

    Business Rules:
    - Doctor must belong to the caller's tenant (otherwise DOCTOR_NOT_FOUND)
    - Archiving twice is a no-op
    - Allowed whatever the subscription state
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, doctor_id: UUID, user_id: Optional[UUID] = None
    ) -> Result[DoctorResponse]:
        async with self.uow:
            doctor = await self.uow.doctors.get_by_id(doctor_id)
            if doctor is None or doctor.tenant_id != tenant_id:
                return Return.err(Error(ErrorCode.DOCTOR_NOT_FOUND, "Doctor not found"))

            if doctor.is_deleted:
                return Return.ok(DoctorResponse.from_doctor(doctor))

            doctor.is_deleted = True
            doctor = await self.uow.doctors.update(doctor)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    action="doctor_archived",
                    event_metadata={"doctor_id": str(doctor_id)},
                )
            )

            await self.uow.commit()
            return Return.ok(DoctorResponse.from_doctor(doctor))
