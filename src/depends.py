from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.services.payment_gateway import PaymentGateway
from src.domain.entities import UserRole
from src.domain.errors import ErrorCode

security = HTTPBearer(auto_error=False)


class ClinicContext(BaseModel):
    """Authenticated clinic admin acting on their own tenant"""

    user_id: UUID
    tenant_id: UUID
    role: str


async def get_unit_of_work(request: Request):
    database = request.app.state.database
    async with database.session() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, tenant_id, role

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    payload = verify_jwt(credentials.credentials) if credentials else None

    if payload is None:
        raise ClientError(
            Error(ErrorCode.UNAUTHORIZED, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload


async def get_clinic_context(user: dict = Depends(get_current_user)) -> ClinicContext:
    """
    Dependency for clinic-admin routes (payments, subscription, doctors).

    Raises:
        ClientError: 403 INSUFFICIENT_ROLE for non clinic admins,
            401 TENANT_CONTEXT_MISSING when the token carries no tenant
    """
    if user.get("role") != UserRole.CLINIC_ADMIN.value:
        raise ClientError(
            Error(ErrorCode.INSUFFICIENT_ROLE, "Clinic admin role required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    tenant_id = user.get("tenant_id")
    if not tenant_id:
        raise ClientError(
            Error(ErrorCode.TENANT_CONTEXT_MISSING, "Tenant context missing"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return ClinicContext(user_id=user["user_id"], tenant_id=tenant_id, role=user["role"])
