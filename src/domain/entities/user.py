"""
User Entity

A person who signs in: clinic administrators, patients and platform admins.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email must be unique across all users (stored lower-cased)
    - Password stored as bcrypt hash (cost factor 12)
    - Clinic admins carry the tenant_id of the clinic they own
    - verification_code is single-use and short-lived
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    phone: Optional[str] = Field(default=None, max_length=30)

    role: UserRole = Field(default=UserRole.PATIENT)
    tenant_id: Optional[UUID] = Field(default=None, index=True)
    is_active: bool = Field(default=True)

    # Email verification
    email_verified: bool = Field(default=False)
    verification_code: Optional[str] = Field(default=None, max_length=6)
    verification_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_email_verified", "email_verified"),)
