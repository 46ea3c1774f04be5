"""
Admin API Key Authentication

Validates admin API keys for platform administration endpoints.
"""

import secrets

from fastapi import Header, status
from libs.result import Error
from src.api.error import ClientError
from src.domain.errors import ErrorCode
from config import ApplicationConfig


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used for plan administration and billing-system integrations.
    Different from user JWT authentication - this is service-to-service auth.

    Args:
        x_admin_api_key: API key from X-Admin-API-Key header

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error(ErrorCode.UNAUTHORIZED, "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY):
        raise ClientError(
            Error(ErrorCode.INVALID_API_KEY, "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
