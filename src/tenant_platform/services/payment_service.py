"""
tenant_platform.services.payment_service

Payment service boundary.

Responsibilities:
- Give modules a stable interface for charges, refunds and subscriptions.
- Until a payment provider is wired in, acknowledge every request with a
  synthetic identifier derived from the current time.
"""

from __future__ import annotations

import time
from typing import Any

from tenant_platform.observability.logging import get_logger

log = get_logger(__name__)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def summarize_payment(payment_data: Any) -> dict[str, Any]:
    """Loggable view of a payment payload: field names only, never values."""
    if isinstance(payment_data, dict):
        return {"fields": sorted(str(k) for k in payment_data)}
    return {"payload_type": type(payment_data).__name__}


class PaymentService:
    """
    No provider is contacted: inputs are accepted as-is and every call succeeds.
    Identifiers look like `txn_1700000000000`.
    """

    @staticmethod
    async def process_payment(payment_data: Any) -> dict[str, Any]:
        log.info("payment_processing", **summarize_payment(payment_data))
        return {
            "success": True,
            "transaction_id": f"txn_{_epoch_millis()}",
            "message": "Payment processed successfully",
        }

    @staticmethod
    async def refund_payment(transaction_id: Any, amount: Any) -> dict[str, Any]:
        log.info("payment_refunding", transaction_id=transaction_id, amount=amount)
        return {
            "success": True,
            "refund_id": f"ref_{_epoch_millis()}",
            "message": "Refund processed successfully",
        }

    @staticmethod
    async def create_subscription(plan_id: Any, customer_id: Any) -> dict[str, Any]:
        log.info("subscription_creating", plan_id=plan_id, customer_id=customer_id)
        return {
            "success": True,
            "subscription_id": f"sub_{_epoch_millis()}",
            "message": "Subscription created successfully",
        }


# --- Module Notes -----------------------------------------------------------
# Swapping in a real provider (Stripe, PayPal, ...) should only touch this class;
# `api.routers.payments` depends on the method shapes, not on the provider.
