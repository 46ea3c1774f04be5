"""
Login Use Case

Authenticates a user and returns a tenant-scoped JWT access token.
"""

from datetime import datetime

import bcrypt

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from .dtos import LoginResponse

# Real bcrypt hash checked for unknown emails so both paths cost the same
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


def _invalid_credentials() -> Error:
    return Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Inactive users cannot log in
    - JWT carries user_id, tenant_id and role
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.strip().lower())

            # Always perform a hash check even if user not found
            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(_invalid_credentials())

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(_invalid_credentials())

            if not user.is_active:
                return Return.err(_invalid_credentials())

            subscription_status = None
            if user.tenant_id:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)
                if tenant is not None:
                    subscription_status = tenant.subscription_status

            user.last_login_at = datetime.utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            access_token = generate_jwt(user.id, user.tenant_id, user.role.value)

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    user_id=str(user.id),
                    tenant_id=str(user.tenant_id) if user.tenant_id else None,
                    role=user.role.value,
                    subscription_status=subscription_status,
                )
            )
