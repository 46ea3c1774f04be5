"""
Plan Use Case DTOs (Data Transfer Objects)

Commands for plan administration and the public plan view.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import Plan

SUPPORTED_CURRENCIES = ("USD", "EUR", "GBP", "INR")


# ============================================================================
# Command DTOs
# ============================================================================


class CreatePlanCommand(BaseModel):
    """New catalog tier"""

    code: str
    name: str
    description: str = ""
    price_monthly_minor: int
    price_yearly_minor: int
    currency: str = "INR"
    max_doctors: int
    max_patients: int = 100
    max_storage_gb: int = 10
    allow_api: bool = False
    custom_branding: bool = False
    features: List[str] = Field(default_factory=list)
    tier_level: int
    is_active: bool = True


class UpdatePlanCommand(BaseModel):
    """Partial update; None leaves a field unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    price_monthly_minor: Optional[int] = None
    price_yearly_minor: Optional[int] = None
    currency: Optional[str] = None
    max_doctors: Optional[int] = None
    max_patients: Optional[int] = None
    max_storage_gb: Optional[int] = None
    allow_api: Optional[bool] = None
    custom_branding: Optional[bool] = None
    features: Optional[List[str]] = None
    tier_level: Optional[int] = None
    is_active: Optional[bool] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PlanResponse(BaseModel):
    """Catalog tier as exposed over HTTP"""

    code: str
    name: str
    slug: str
    description: str
    price_monthly_minor: int
    price_yearly_minor: int
    currency: str
    max_doctors: int
    max_patients: int
    max_storage_gb: int
    allow_api: bool
    custom_branding: bool
    features: List[str]
    tier_level: int
    is_active: bool
    updated_at: Optional[datetime] = None

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanResponse":
        return cls(
            code=plan.code,
            name=plan.name,
            slug=plan.slug,
            description=plan.description or "",
            price_monthly_minor=plan.price_monthly_minor,
            price_yearly_minor=plan.price_yearly_minor,
            currency=plan.currency,
            max_doctors=plan.max_doctors,
            max_patients=plan.max_patients,
            max_storage_gb=plan.max_storage_gb,
            allow_api=plan.allow_api,
            custom_branding=plan.custom_branding,
            features=list(plan.features or []),
            tier_level=plan.tier_level,
            is_active=plan.is_active,
            updated_at=plan.updated_at,
        )


class PlanListResponse(BaseModel):
    """List of plans ordered by tier level"""

    plans: List[PlanResponse]
    count: int
