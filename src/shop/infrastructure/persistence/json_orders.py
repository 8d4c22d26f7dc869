"""JSON-file-backed implementation of Orders."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from shop.domain.model.cart import CartItem
from shop.domain.model.value_objects import Money, OrderId, PaymentId, UserId
from shop.domain.ports.orders import Orders


@dataclass(frozen=True)
class OrderRecord:
    """A recorded order as listed back to the user."""

    id: str
    user_id: str
    payment_id: str
    total: str
    item_count: int
    created_at: str


class JsonOrders(Orders):
    """Order ledger in one JSON file; file I/O runs in a worker thread."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._lock = asyncio.Lock()

    # --- Orders interface -----------------------------------------------------

    async def create(
        self,
        user_id: UserId,
        payment_id: PaymentId,
        items: tuple[CartItem, ...],
        total: Money,
    ) -> OrderId:
        order_id = OrderId.new()
        record = {
            "id": str(order_id),
            "user_id": str(user_id),
            "payment_id": str(payment_id),
            "items": [
                {
                    "item_id": str(item.item_id),
                    "name": item.name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in items
            ],
            "total": str(total.amount),
            "currency": total.currency,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        async with self._lock:
            orders = await asyncio.to_thread(self._load_raw)
            orders.append(record)
            await asyncio.to_thread(self._persist_raw, orders)
        return order_id

    # --- Queries --------------------------------------------------------------

    def find_by(self, user_id: UserId) -> list[OrderRecord]:
        return [
            OrderRecord(
                id=raw["id"],
                user_id=raw["user_id"],
                payment_id=raw["payment_id"],
                total=str(Money(Decimal(raw["total"]), raw.get("currency", "USD"))),
                item_count=sum(i["quantity"] for i in raw["items"]),
                created_at=datetime.fromisoformat(raw["created_at"]).strftime("%Y-%m-%d %H:%M UTC"),
            )
            for raw in self._load_raw()
            if raw["user_id"] == str(user_id)
        ]

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
