"""Abstract shopping cart store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.cart import CartTotal
from shop.domain.model.value_objects import UserId


class ShoppingCart(ABC):

    @abstractmethod
    async def get(self, user_id: UserId) -> CartTotal:
        """Return the current cart snapshot for *user_id* (empty if none)."""

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Remove the cart of *user_id*."""
