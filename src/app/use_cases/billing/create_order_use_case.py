"""
Create Payment Order Use Case

Opens a provider checkout for a plan at the catalog price.
"""

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.payment_ledger import PaymentLedger
from src.app.services.plan_catalog import parse_billing_cycle
from src.app.services.unit_of_work import UnitOfWork
from .dtos import CreateOrderCommand, CreateOrderResponse


class CreateOrderUseCase:
    """
    Use case for starting a provider payment.

    Business Rules:
    - Amount and currency come from the plan catalog, never the client
    - Tenant must have verified its email first
    - Provider call has a hard deadline; nothing is stored if it fails
    - Pending payment record and audit event commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        gateway: PaymentGateway,
        provider_timeout_seconds: float = None,
    ):
        self.uow = uow
        self.gateway = gateway
        self.provider_timeout_seconds = (
            provider_timeout_seconds
            if provider_timeout_seconds is not None
            else ApplicationConfig.PAYMENT_PROVIDER_TIMEOUT_SECONDS
        )

    async def execute(self, command: CreateOrderCommand) -> Result[CreateOrderResponse]:
        """
        Execute create order use case.

        Args:
            command: CreateOrderCommand with tenant, plan and billing cycle

        Returns:
            Result[CreateOrderResponse], or Error
            (INVALID_BILLING_CYCLE, TENANT_NOT_FOUND, PLAN_NOT_FOUND,
            INVALID_TRANSITION, ORDER_CREATION_FAILED, DUPLICATE_IDEMPOTENCY_KEY)
        """
        cycle = parse_billing_cycle(command.billing_cycle)
        if cycle.is_err():
            return Return.err(cycle.error)

        async with self.uow:
            ledger = PaymentLedger(
                self.uow,
                self.gateway,
                provider_timeout_seconds=self.provider_timeout_seconds,
            )
            result = await ledger.begin_provider_payment(
                tenant_id=command.tenant_id,
                plan_code=command.plan_code,
                billing_cycle=cycle.value,
                user_id=command.user_id,
                email=command.email,
                requested_amount_minor_units=command.amount_minor_units,
                requested_currency=command.currency,
            )
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

            checkout = result.value
            return Return.ok(
                CreateOrderResponse(
                    payment_id=checkout.payment_id,
                    provider_order_id=checkout.provider_order_id,
                    amount_minor_units=checkout.amount_minor_units,
                    currency=checkout.currency,
                    plan_code=checkout.plan_code,
                    billing_cycle=checkout.billing_cycle,
                    key_id=self.gateway.key_id or "",
                )
            )
