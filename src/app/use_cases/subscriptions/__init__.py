"""Subscription Use Cases"""

from .get_subscription_use_case import GetSubscriptionUseCase
from .cancel_subscription_use_case import CancelSubscriptionUseCase
from .mark_past_due_use_case import MarkPastDueUseCase
from .dtos import SubscriptionView

__all__ = [
    "GetSubscriptionUseCase",
    "CancelSubscriptionUseCase",
    "MarkPastDueUseCase",
    "SubscriptionView",
]
