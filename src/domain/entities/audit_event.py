"""
AuditEvent Entity

Immutable log of subscription, payment and registration events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of billing-relevant events.

    Business Rules:
    - Immutable (never updated or deleted)
    - tenant_id nullable for platform-level events (plan administration)
    - Metadata stores event context (plan code, payment id, amounts)
    - Never stores secrets, signatures or verification codes
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "subscription_activated"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
    )
