"""
Add Doctor Use Case

The seat-consuming operation gated by the tenant's subscription.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.entitlement_evaluator import EntitlementEvaluator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Doctor
from src.domain.errors import ErrorCode
from .dtos import AddDoctorCommand, AddDoctorResponse, DoctorResponse

logger = logging.getLogger(__name__)


class AddDoctorUseCase:
    """
    Use case for adding a doctor.

    Business Rules:
    - Subscription must be ACTIVE
    - Seat count must be below the plan limit (unlimited plans skip the count)
    - Check and insert run back to back; the limit is soft under concurrency
    - Records audit event doctor_added
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: AddDoctorCommand) -> Result[AddDoctorResponse]:
        """
        Execute add doctor use case.

        Returns:
            Result[AddDoctorResponse], or Error
            (VALIDATION_ERROR, TENANT_NOT_FOUND, SUBSCRIPTION_INACTIVE,
            PLAN_NOT_FOUND, SEAT_LIMIT_REACHED)
        """
        name = command.name.strip()
        email = command.email.strip().lower()
        specialization = command.specialization.strip()
        if not (name and email and specialization):
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "Name, email and specialization are required")
            )

        async with self.uow:
            check = await EntitlementEvaluator(self.uow).assert_can_add_doctor(command.tenant_id)
            if check.is_err():
                logger.info(
                    f"Doctor add rejected for tenant {command.tenant_id}: {check.error.code}"
                )
                return Return.err(check.error)

            doctor = await self.uow.doctors.create(
                Doctor(
                    tenant_id=command.tenant_id,
                    name=name,
                    email=email,
                    specialization=specialization,
                )
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=command.tenant_id,
                    user_id=command.user_id,
                    action="doctor_added",
                    event_metadata={"doctor_id": str(doctor.id), "plan_code": check.value.plan_code},
                )
            )

            await self.uow.commit()

            seat = check.value
            return Return.ok(
                AddDoctorResponse(
                    doctor=DoctorResponse.from_doctor(doctor),
                    plan_code=seat.plan_code,
                    seat_limit=seat.limit,
                    seats_used=None if seat.unlimited else seat.seats_used + 1,
                )
            )
