"""
Plan Entity

A subscription tier in the catalog.
"""

from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

# Seat/limit sentinel meaning "no limit"
UNLIMITED = -1


class Plan(SQLModel, table=True):
    """
    Plan entity - subscription tier.

    Business Rules:
    - code and tier_level are unique
    - Prices are integers in minor currency units, per billing cycle
    - Limits use UNLIMITED (-1) for "no limit"
    - Archived plans (is_active=False) cannot be purchased or enforced
    - Created, updated and archived by platform admins only
    """

    __tablename__ = "plans"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=50)
    name: str = Field(max_length=50)
    slug: str = Field(unique=True, max_length=60)
    description: str = Field(default="", max_length=200)

    price_monthly_minor: int = Field(ge=0)
    price_yearly_minor: int = Field(ge=0)
    currency: str = Field(default="INR", max_length=3)

    max_doctors: int = Field(default=5, ge=UNLIMITED)
    max_patients: int = Field(default=100, ge=UNLIMITED)
    max_storage_gb: int = Field(default=10, ge=UNLIMITED)
    allow_api: bool = Field(default=False)
    custom_branding: bool = Field(default=False)
    features: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    is_active: bool = Field(default=True)
    tier_level: int = Field(unique=True, ge=1)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_plan_active_tier", "is_active", "tier_level"),)
