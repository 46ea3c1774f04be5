"""Email verification code helpers shared by registration and resend."""

import secrets
from datetime import datetime, timedelta

from config import ApplicationConfig


def generate_verification_code() -> str:
    """Six-digit numeric code, cryptographically random"""
    return str(100000 + secrets.randbelow(900000))


def verification_expiry(now: datetime = None) -> datetime:
    now = now or datetime.utcnow()
    return now + timedelta(minutes=ApplicationConfig.VERIFICATION_CODE_TTL_MINUTES)
