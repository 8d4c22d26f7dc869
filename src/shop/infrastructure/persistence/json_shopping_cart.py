"""JSON-file-backed implementation of ShoppingCart."""

from __future__ import annotations

import asyncio
import json
from decimal import Decimal
from pathlib import Path

from shop.domain.exceptions import EntityNotFoundError
from shop.domain.model.cart import CartItem, CartTotal
from shop.domain.model.value_objects import ItemId, Money, Quantity, UserId
from shop.domain.ports.shopping_cart import ShoppingCart


class JsonShoppingCart(ShoppingCart):
    """Carts keyed by user id, each a list of item records.

    File reads and writes run in a worker thread so the event loop is not
    blocked; updates are serialized per instance.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._lock = asyncio.Lock()

    # --- ShoppingCart interface -----------------------------------------------

    async def get(self, user_id: UserId) -> CartTotal:
        raw_items = (await asyncio.to_thread(self._load_raw)).get(str(user_id), [])
        return CartTotal.of([self._to_domain(raw) for raw in raw_items])

    async def delete(self, user_id: UserId) -> None:
        async with self._lock:
            carts = await asyncio.to_thread(self._load_raw)
            if carts.pop(str(user_id), None) is None:
                raise EntityNotFoundError(f"No cart for user {user_id}")
            await asyncio.to_thread(self._persist_raw, carts)

    # --- Cart management --------------------------------------------------------

    async def add(self, user_id: UserId, item: CartItem) -> None:
        """Put *item* in the cart, replacing any line for the same item id."""
        async with self._lock:
            carts = await asyncio.to_thread(self._load_raw)
            raw_items = [
                raw for raw in carts.get(str(user_id), [])
                if raw["item_id"] != str(item.item_id)
            ]
            raw_items.append(self._to_raw(item))
            carts[str(user_id)] = raw_items
            await asyncio.to_thread(self._persist_raw, carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: CartItem) -> dict:
        return {
            "item_id": str(item.item_id),
            "name": item.name,
            "quantity": item.quantity.value,
            "unit_price": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartItem:
        return CartItem(
            item_id=ItemId.parse(raw["item_id"]),
            name=raw["name"],
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(Decimal(raw["unit_price"]), raw.get("currency", "USD")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, list[dict]]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, carts: dict[str, list[dict]]) -> None:
        self._file_path.write_text(
            json.dumps(carts, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
