"""Shopping cart snapshot.

A CartTotal is fetched once at the start of a checkout attempt and never
re-fetched, so a concurrent cart mutation cannot re-price an attempt that
is already under way.
"""

from __future__ import annotations

from dataclasses import dataclass

from shop.domain.model.value_objects import ItemId, Money, Quantity


@dataclass(frozen=True)
class CartItem:
    """Price snapshot of one catalogue item in the cart."""

    item_id: ItemId
    name: str
    quantity: Quantity
    unit_price: Money

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class CartTotal:
    """Immutable cart contents plus the computed total."""

    items: tuple[CartItem, ...]
    total: Money

    @property
    def is_empty(self) -> bool:
        return not self.items

    @staticmethod
    def of(items: list[CartItem] | tuple[CartItem, ...]) -> CartTotal:
        """Build a snapshot whose total is the sum of the item subtotals."""
        total = Money.zero()
        for item in items:
            total = total + item.subtotal
        return CartTotal(items=tuple(items), total=total)

    @staticmethod
    def empty() -> CartTotal:
        return CartTotal(items=(), total=Money.zero())
