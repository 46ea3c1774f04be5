"""
Doctor Entity

A practitioner under a tenant; each non-archived doctor occupies one seat.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Doctor(SQLModel, table=True):
    """
    Doctor entity.

    Business Rules:
    - Counts against the tenant's plan seat limit while is_deleted is False
    - Archiving (is_deleted=True) frees the seat
    """

    __tablename__ = "doctors"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(nullable=False, index=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    specialization: str = Field(max_length=255)

    is_deleted: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_doctor_tenant_deleted", "tenant_id", "is_deleted"),)
