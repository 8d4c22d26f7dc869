"""Abstract order ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.cart import CartItem
from shop.domain.model.value_objects import Money, OrderId, PaymentId, UserId


class Orders(ABC):

    @abstractmethod
    async def create(
        self,
        user_id: UserId,
        payment_id: PaymentId,
        items: tuple[CartItem, ...],
        total: Money,
    ) -> OrderId:
        """Record a paid order and return its id."""
