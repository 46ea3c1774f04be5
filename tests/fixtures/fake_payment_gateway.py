import asyncio
import hmac
from typing import Dict, List, Optional

from src.adapter.services.razorpay_gateway import compute_signature
from src.app.services.payment_gateway import PaymentGateway, PaymentGatewayError, ProviderOrder

TEST_KEY_ID = "rzp_test_fake"
TEST_KEY_SECRET = "test_secret_for_signatures"


class FakePaymentGateway(PaymentGateway):
    """
    Deterministic provider double.

    Orders get sequential ids; signatures use the real HMAC scheme over
    TEST_KEY_SECRET. `delay` simulates a slow provider, `fail` an outage.
    """

    def __init__(self, key_secret: str = TEST_KEY_SECRET):
        self.key_id = TEST_KEY_ID
        self.key_secret = key_secret
        self.delay: float = 0.0
        self.fail: bool = False
        self.next_order_id: Optional[str] = None
        self.orders: List[Dict] = []
        self.verify_calls = 0
        self.closed = False

    async def create_order(self, amount_minor_units, currency, receipt, metadata=None):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise PaymentGatewayError("provider down")

        order_id = self.next_order_id or f"order_test_{len(self.orders) + 1}"
        self.next_order_id = None
        self.orders.append(
            {
                "id": order_id,
                "amount": amount_minor_units,
                "currency": currency,
                "receipt": receipt,
                "notes": metadata or {},
            }
        )
        return ProviderOrder(
            provider_order_id=order_id,
            amount_minor_units=amount_minor_units,
            currency=currency,
        )

    async def verify_signature(self, order_id, payment_id, signature):
        self.verify_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        expected = compute_signature(self.key_secret, order_id, payment_id)
        return hmac.compare_digest(expected, signature or "")

    async def aclose(self):
        self.closed = True


def sign(order_id: str, payment_id: str, secret: str = TEST_KEY_SECRET) -> str:
    return compute_signature(secret, order_id, payment_id)
