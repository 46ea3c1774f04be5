"""
Plan Catalog

Read-mostly view over subscription tiers. The catalog is the single source
of truth for prices and seat limits; callers never supply either.
"""

import logging
import re
from typing import List

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UNLIMITED, BillingCycle, Plan
from src.domain.errors import ErrorCode, plan_not_found

logger = logging.getLogger(__name__)


# Default tiers, prices in minor units (paise)
DEFAULT_PLANS = [
    {
        "code": "PRO",
        "name": "PRO",
        "description": "For small clinics getting started with core appointment & tenant management.",
        "price_monthly_minor": 199900,
        "price_yearly_minor": 1999000,
        "currency": "INR",
        "max_doctors": 3,
        "max_patients": 500,
        "max_storage_gb": 10,
        "allow_api": False,
        "custom_branding": False,
        "features": ["Clinic onboarding", "Doctor management", "Appointments", "Basic support"],
        "tier_level": 1,
    },
    {
        "code": "ENTERPRISE",
        "name": "ENTERPRISE",
        "description": "For growing clinics needing higher scale and advanced access controls.",
        "price_monthly_minor": 499900,
        "price_yearly_minor": 4999000,
        "currency": "INR",
        "max_doctors": 5,
        "max_patients": 5000,
        "max_storage_gb": 100,
        "allow_api": True,
        "custom_branding": True,
        "features": [
            "Everything in PRO",
            "RBAC access control",
            "Advanced analytics",
            "Priority support",
            "API access",
            "Custom branding",
        ],
        "tier_level": 2,
    },
    {
        "code": "PROFESSIONAL",
        "name": "PROFESSIONAL",
        "description": "Unlimited plan for premium clinics and networks.",
        "price_monthly_minor": 799900,
        "price_yearly_minor": 7999000,
        "currency": "INR",
        "max_doctors": UNLIMITED,
        "max_patients": UNLIMITED,
        "max_storage_gb": UNLIMITED,
        "allow_api": True,
        "custom_branding": True,
        "features": [
            "Everything in ENTERPRISE",
            "Unlimited doctors/patients/storage",
            "Dedicated onboarding",
            "SLA support",
        ],
        "tier_level": 3,
    },
]


def normalize_plan_code(code) -> str:
    return str(code or "").strip().upper()


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", str(value).strip().lower())
    return slug.strip("-")


def is_unlimited(limit: int) -> bool:
    return limit == UNLIMITED


def parse_billing_cycle(value) -> Result[BillingCycle]:
    """monthly or yearly, case-insensitive; anything else is INVALID_BILLING_CYCLE"""
    if isinstance(value, BillingCycle):
        return Return.ok(value)
    normalized = str(value or "").strip().lower()
    try:
        return Return.ok(BillingCycle(normalized))
    except ValueError:
        return Return.err(
            Error(
                ErrorCode.INVALID_BILLING_CYCLE,
                "Billing cycle must be monthly or yearly",
                {"billing_cycle": value},
            )
        )


class PlanCatalog:
    """Plan lookups and canonical pricing over the plans repository"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_active_plan(self, code) -> Result[Plan]:
        """Active plan by code, or PLAN_NOT_FOUND for unknown/archived codes"""
        normalized = normalize_plan_code(code)
        if not normalized:
            return Return.err(plan_not_found(normalized))

        plan = await self.uow.plans.get_by_code(normalized)
        if plan is None or not plan.is_active:
            return Return.err(plan_not_found(normalized))
        return Return.ok(plan)

    @staticmethod
    def price_for(plan: Plan, billing_cycle: BillingCycle) -> int:
        if BillingCycle(billing_cycle) == BillingCycle.yearly:
            return plan.price_yearly_minor
        return plan.price_monthly_minor

    @staticmethod
    def seat_limit(plan: Plan) -> int:
        return plan.max_doctors

    async def list_active_plans(self) -> List[Plan]:
        return await self.uow.plans.list(include_inactive=False)

    async def list_all_plans(self) -> List[Plan]:
        return await self.uow.plans.list(include_inactive=True)

    async def seed_defaults(self) -> int:
        """
        Create any DEFAULT_PLANS missing by code. Caller commits.

        Existing plans are left untouched so admin edits survive restarts.

        Returns:
            Number of plans created
        """
        created = 0
        for tier in DEFAULT_PLANS:
            existing = await self.uow.plans.get_by_code(tier["code"])
            if existing is None:
                await self.uow.plans.create(Plan(slug=slugify(tier["code"]), **tier))
                created += 1
        if created:
            logger.info(f"Seeded {created} default plans")
        return created
