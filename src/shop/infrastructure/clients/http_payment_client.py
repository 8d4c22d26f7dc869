"""HTTP client for the remote payment processor.

Usage:
    client = HttpPaymentClient(base_url="https://payments.example.com/api/v1")
    payment_id = await client.process(user_id, total, card)
    await client.close()
"""

from __future__ import annotations

from typing import Optional

import httpx

from shop.domain.exceptions import PaymentError
from shop.domain.model.value_objects import Card, Money, PaymentId, UserId
from shop.domain.ports.payment_client import PaymentClient


class HttpPaymentClient(PaymentClient):
    """PaymentClient backed by ``POST {base_url}/payments``.

    A 409 Conflict means the processor has already charged this payment;
    its body carries the existing payment id, which is accepted like a 200.
    Any other status is a PaymentError. Transport errors (timeouts, refused
    connections) propagate as-is so the caller's retry policy can act on them.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    async def process(self, user_id: UserId, total: Money, card: Card) -> PaymentId:
        response = await self._get_client().post(
            "/payments", json=self._to_payload(user_id, total, card)
        )
        if response.status_code in (httpx.codes.OK, httpx.codes.CONFLICT):
            return PaymentId.parse(response.json()["paymentId"])
        raise PaymentError(response.reason_phrase or f"HTTP {response.status_code}")

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    @staticmethod
    def _to_payload(user_id: UserId, total: Money, card: Card) -> dict:
        return {
            "id": str(user_id),
            "total": str(total.amount),
            "card": {
                "name": card.name,
                "number": card.number,
                "expiration": card.expiration,
                "cvv": card.cvv,
            },
        }
