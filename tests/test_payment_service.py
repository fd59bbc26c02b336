"""
tests.test_payment_service

Payment service return shapes and the authenticated payments routes.
"""

from __future__ import annotations

import re

import httpx
import pytest

from tenant_platform.services.payment_service import PaymentService, summarize_payment


@pytest.mark.asyncio
async def test_process_payment_returns_transaction_id() -> None:
    result = await PaymentService.process_payment({"amount": 1500, "currency": "usd"})
    assert result["success"] is True
    assert re.fullmatch(r"txn_\d{13,}", result["transaction_id"])
    assert result["message"] == "Payment processed successfully"


@pytest.mark.asyncio
async def test_refund_and_subscription_shapes() -> None:
    refund = await PaymentService.refund_payment("txn_1", None)
    assert re.fullmatch(r"ref_\d{13,}", refund["refund_id"])
    assert refund["message"] == "Refund processed successfully"

    sub = await PaymentService.create_subscription("gold", "cus_42")
    assert re.fullmatch(r"sub_\d{13,}", sub["subscription_id"])
    assert sub["message"] == "Subscription created successfully"


@pytest.mark.asyncio
async def test_payment_routes_require_authentication(client: httpx.AsyncClient) -> None:
    r = await client.post("/api/payments", json={"amount": 10})
    assert r.status_code == 401
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_payment_routes(client: httpx.AsyncClient, auth) -> None:
    headers = auth("buyer")

    r = await client.post("/api/payments", json={"amount": 10}, headers=headers)
    assert r.status_code == 200
    assert r.json()["transaction_id"].startswith("txn_")

    r = await client.post("/api/payments/txn_1/refund", json={"amount": 5}, headers=headers)
    assert r.status_code == 200
    assert r.json()["refund_id"].startswith("ref_")

    r = await client.post(
        "/api/payments/subscriptions",
        json={"plan_id": "gold", "customer_id": "buyer"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["subscription_id"].startswith("sub_")


@pytest.mark.asyncio
async def test_payment_routes_accept_any_body(client: httpx.AsyncClient, auth) -> None:
    headers = auth("buyer")

    r = await client.post("/api/payments", headers=headers)
    assert r.status_code == 200
    assert r.json()["transaction_id"].startswith("txn_")

    r = await client.post("/api/payments", json=[1, 2], headers=headers)
    assert r.status_code == 200

    r = await client.post("/api/payments/txn_1/refund", headers=headers)
    assert r.status_code == 200
    assert r.json()["refund_id"].startswith("ref_")

    r = await client.post("/api/payments/subscriptions", headers=headers)
    assert r.status_code == 200
    assert r.json()["subscription_id"].startswith("sub_")


def test_payment_summary_omits_values() -> None:
    summary = summarize_payment({"card_number": "4242424242424242", "amount": 10})
    assert summary == {"fields": ["amount", "card_number"]}
    assert "4242424242424242" not in repr(summary)

    assert summarize_payment([1, 2]) == {"payload_type": "list"}
    assert summarize_payment(None) == {"payload_type": "NoneType"}
