"""
Plan Use Cases

Public catalog reads and platform-admin plan management.
"""

from .list_active_plans_use_case import ListActivePlansUseCase, ListAllPlansUseCase
from .get_plan_use_case import GetPlanUseCase
from .create_plan_use_case import CreatePlanUseCase
from .update_plan_use_case import UpdatePlanUseCase
from .archive_plan_use_case import ArchivePlanUseCase
from .seed_plans_use_case import SeedPlansUseCase
from .dtos import CreatePlanCommand, PlanListResponse, PlanResponse, UpdatePlanCommand

__all__ = [
    # Use Cases
    "ListActivePlansUseCase",
    "ListAllPlansUseCase",
    "GetPlanUseCase",
    "CreatePlanUseCase",
    "UpdatePlanUseCase",
    "ArchivePlanUseCase",
    "SeedPlansUseCase",
    # DTOs
    "CreatePlanCommand",
    "UpdatePlanCommand",
    "PlanResponse",
    "PlanListResponse",
]
