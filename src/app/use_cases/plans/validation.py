"""Field rules shared by plan creation and update."""

from typing import Optional

from libs.result import Error
from src.domain.entities import UNLIMITED
from src.domain.errors import ErrorCode
from .dtos import SUPPORTED_CURRENCIES

LIMIT_FIELDS = ("max_doctors", "max_patients", "max_storage_gb")
PRICE_FIELDS = ("price_monthly_minor", "price_yearly_minor")


def validate_plan_fields(fields: dict) -> Optional[Error]:
    """
    Check the plan fields present in `fields`.

    Returns:
        Error(VALIDATION_ERROR) for the first bad field, None when all pass
    """
    for name in PRICE_FIELDS:
        if name in fields and fields[name] < 0:
            return _invalid(name, "Price cannot be negative")

    for name in LIMIT_FIELDS:
        if name in fields and fields[name] < UNLIMITED:
            return _invalid(name, f"Limit must be {UNLIMITED} (unlimited) or >= 0")

    if "currency" in fields and fields["currency"] not in SUPPORTED_CURRENCIES:
        return _invalid("currency", f"Currency must be one of {', '.join(SUPPORTED_CURRENCIES)}")

    if "tier_level" in fields and fields["tier_level"] < 1:
        return _invalid("tier_level", "Tier level must be at least 1")

    if "name" in fields and not str(fields["name"]).strip():
        return _invalid("name", "Plan name is required")

    return None


def _invalid(field: str, message: str) -> Error:
    return Error(ErrorCode.VALIDATION_ERROR, message, {"field": field})
