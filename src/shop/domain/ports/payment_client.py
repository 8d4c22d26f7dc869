"""Abstract payment processor."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.value_objects import Card, Money, PaymentId, UserId


class PaymentClient(ABC):

    @abstractmethod
    async def process(self, user_id: UserId, total: Money, card: Card) -> PaymentId:
        """Charge *card* for *total* and return the payment id."""
