from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(
    user_id: UUID,
    tenant_id: Optional[UUID],
    role: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        tenant_id: Tenant UUID, None for users without a clinic
        role: User role (SUPER_ADMIN, CLINIC_ADMIN, PATIENT)
        expires_minutes: Override of JWT_EXPIRE_MINUTES

    Returns:
        JWT token string (HS256)
    """
    if expires_minutes is None:
        expires_minutes = ApplicationConfig.JWT_EXPIRE_MINUTES

    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "tenant_id": str(tenant_id) if tenant_id else None,
        "role": role,
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
