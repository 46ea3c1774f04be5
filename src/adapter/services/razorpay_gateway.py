"""
Razorpay Payment Gateway

Order creation over the Razorpay REST API and checkout signature verification.
"""

import hashlib
import hmac
import logging
from typing import Dict, Optional

import httpx

from src.app.services.payment_gateway import (
    PaymentGateway,
    PaymentGatewayError,
    PaymentGatewayTimeout,
    ProviderOrder,
)

logger = logging.getLogger(__name__)


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """HMAC-SHA256 hex digest of "order_id|payment_id" (Razorpay checkout scheme)"""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class RazorpayGateway(PaymentGateway):
    """
    Razorpay implementation of PaymentGateway.

    The httpx client is created once and closed by aclose() at shutdown.
    Every call is bounded by timeout_seconds; nothing is retried here.
    """

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout_seconds: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.key_id = key_id
        self._key_secret = key_secret
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=httpx.Timeout(timeout_seconds),
        )

    async def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> ProviderOrder:
        if not self.key_id or not self._key_secret:
            raise PaymentGatewayError("Razorpay credentials are not configured")

        payload = {
            "amount": amount_minor_units,
            "currency": currency,
            "receipt": receipt,
            "notes": metadata or {},
        }

        try:
            response = await self._client.post("/orders", json=payload)
        except httpx.TimeoutException as exc:
            logger.warning(f"Razorpay order creation timed out for receipt {receipt}")
            raise PaymentGatewayTimeout("Payment provider timed out") from exc
        except httpx.HTTPError as exc:
            logger.error(f"Razorpay transport error: {exc.__class__.__name__}")
            raise PaymentGatewayError("Payment provider unreachable") from exc

        if response.status_code >= 400:
            try:
                description = response.json().get("error", {}).get("description")
            except ValueError:
                description = None
            logger.error(
                f"Razorpay rejected order (status={response.status_code}): "
                f"{description or 'no description'}"
            )
            raise PaymentGatewayError("Payment provider rejected the order")

        data = response.json()
        order_id = data.get("id")
        if not order_id:
            raise PaymentGatewayError("Payment provider returned no order id")

        return ProviderOrder(
            provider_order_id=order_id,
            amount_minor_units=int(data.get("amount", amount_minor_units)),
            currency=data.get("currency", currency),
        )

    async def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        if not signature or not self._key_secret:
            return False
        expected = compute_signature(self._key_secret, order_id, payment_id)
        return hmac.compare_digest(expected, signature)

    async def aclose(self) -> None:
        await self._client.aclose()
