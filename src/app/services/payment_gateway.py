"""
Payment Gateway Contract

The core depends on exactly two provider operations: order creation and
signature verification. Implementations live in src/adapter/services.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from pydantic import BaseModel


class PaymentGatewayError(Exception):
    """Provider unreachable or rejected the request"""


class PaymentGatewayTimeout(PaymentGatewayError):
    """Provider did not answer within the configured deadline"""


class ProviderOrder(BaseModel):
    """Order created at the payment provider"""

    provider_order_id: str
    amount_minor_units: int
    currency: str


class PaymentGateway(ABC):
    """Abstract payment provider"""

    key_id: Optional[str] = None

    @abstractmethod
    async def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> ProviderOrder:
        """
        Create a provider order for the given amount.

        Raises:
            PaymentGatewayTimeout: provider call exceeded its deadline
            PaymentGatewayError: any other provider failure
        """
        pass

    @abstractmethod
    async def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """True iff signature authenticates (order_id, payment_id)"""
        pass

    async def aclose(self) -> None:
        """Release any held connections"""
        return None
