"""
tenant_platform.api.routers.payments

HTTP surface over `PaymentService`.

Responsibilities:
- Accept charge, refund and subscription requests from authenticated callers.
- Delegate to the service and return its payload unchanged.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from tenant_platform.api.deps import current_tenant
from tenant_platform.auth.deps import get_principal
from tenant_platform.services.payment_service import PaymentService

router = APIRouter(
    prefix="/api/payments",
    tags=["payments"],
    dependencies=[Depends(get_principal)],
)


class RefundRequest(BaseModel):
    amount: Any = None


class SubscriptionRequest(BaseModel):
    plan_id: Any = None
    customer_id: Any = None


# Bodies are optional and unvalidated; the service accepts whatever it is given.


@router.post("")
async def process_payment(
    payment_data: Any = Body(default=None),
    tenant: str = Depends(current_tenant),
) -> dict[str, Any]:
    if isinstance(payment_data, dict):
        payment_data = {**payment_data, "tenant": tenant}
    return await PaymentService.process_payment(payment_data)


@router.post("/{transaction_id}/refund")
async def refund_payment(
    transaction_id: str, body: RefundRequest | None = None
) -> dict[str, Any]:
    body = body or RefundRequest()
    return await PaymentService.refund_payment(transaction_id, body.amount)


@router.post("/subscriptions")
async def create_subscription(body: SubscriptionRequest | None = None) -> dict[str, Any]:
    body = body or SubscriptionRequest()
    return await PaymentService.create_subscription(body.plan_id, body.customer_id)
