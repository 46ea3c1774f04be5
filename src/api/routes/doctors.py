from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import to_http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.doctors import (
    AddDoctorCommand,
    AddDoctorResponse,
    AddDoctorUseCase,
    ArchiveDoctorUseCase,
    DoctorResponse,
)
from src.depends import ClinicContext, get_clinic_context, get_unit_of_work

router = APIRouter(prefix="/doctors", tags=["Doctors"])


class AddDoctorRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    specialization: str = Field(..., min_length=1, max_length=255)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AddDoctorResponse)
async def add_doctor(
    request: AddDoctorRequest,
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Doctor

    Consumes one seat of the clinic's plan.

    Raises:
        - 403 Forbidden: SUBSCRIPTION_INACTIVE, SEAT_LIMIT_REACHED
        - 404 Not Found: PLAN_NOT_FOUND (plan archived)
    """
    command = AddDoctorCommand(
        tenant_id=context.tenant_id,
        user_id=context.user_id,
        name=request.name,
        email=request.email,
        specialization=request.specialization,
    )
    result = await AddDoctorUseCase(uow).execute(command)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.delete("/{doctor_id}", status_code=status.HTTP_200_OK, response_model=DoctorResponse)
async def archive_doctor(
    doctor_id: UUID,
    context: ClinicContext = Depends(get_clinic_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Archive Doctor, freeing its seat"""
    result = await ArchiveDoctorUseCase(uow).execute(
        context.tenant_id, doctor_id, user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
