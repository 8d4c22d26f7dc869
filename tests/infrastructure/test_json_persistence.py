"""Tests for the JSON-file-backed cart store and order ledger."""

from __future__ import annotations

import asyncio
import json

import pytest

from shop.domain.exceptions import EntityNotFoundError
from shop.domain.model.cart import CartItem
from shop.domain.model.value_objects import ItemId, Money, PaymentId, Quantity, UserId
from shop.infrastructure.persistence.json_orders import JsonOrders
from shop.infrastructure.persistence.json_shopping_cart import JsonShoppingCart


def _item(name: str = "Widget", qty: int = 2, price: str = "15.00", item_id: ItemId | None = None) -> CartItem:
    return CartItem(item_id or ItemId.new(), name, Quantity(qty), Money.of(price))


class TestJsonShoppingCart:

    def test_creates_file(self, tmp_path):
        path = tmp_path / "nested" / "carts.json"
        JsonShoppingCart(path)
        assert json.loads(path.read_text()) == {}

    @pytest.mark.asyncio
    async def test_unknown_user_has_empty_cart(self, tmp_path):
        store = JsonShoppingCart(tmp_path / "carts.json")
        assert (await store.get(UserId.new())).is_empty

    @pytest.mark.asyncio
    async def test_add_then_get(self, tmp_path):
        store = JsonShoppingCart(tmp_path / "carts.json")
        user = UserId.new()
        widget = _item()

        await store.add(user, widget)
        await store.add(user, _item("Gadget", 1, "25.00"))

        cart = await store.get(user)
        assert cart.items[0] == widget
        assert cart.total == Money.of("55.00")

    @pytest.mark.asyncio
    async def test_add_same_item_replaces_quantity(self, tmp_path):
        store = JsonShoppingCart(tmp_path / "carts.json")
        user, item_id = UserId.new(), ItemId.new()

        await store.add(user, _item(qty=2, item_id=item_id))
        await store.add(user, _item(qty=5, item_id=item_id))

        cart = await store.get(user)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == Quantity(5)

    @pytest.mark.asyncio
    async def test_delete(self, tmp_path):
        store = JsonShoppingCart(tmp_path / "carts.json")
        user = UserId.new()
        await store.add(user, _item())

        await store.delete(user)

        assert (await store.get(user)).is_empty

    @pytest.mark.asyncio
    async def test_concurrent_adds_are_all_kept(self, tmp_path):
        store = JsonShoppingCart(tmp_path / "carts.json")
        user = UserId.new()

        await asyncio.gather(*(store.add(user, _item(f"Item {n}")) for n in range(5)))

        assert len((await store.get(user)).items) == 5

    @pytest.mark.asyncio
    async def test_delete_unknown_user_rejected(self, tmp_path):
        store = JsonShoppingCart(tmp_path / "carts.json")
        with pytest.raises(EntityNotFoundError, match="No cart"):
            await store.delete(UserId.new())


class TestJsonOrders:

    @pytest.mark.asyncio
    async def test_create_persists_order(self, tmp_path):
        path = tmp_path / "orders.json"
        ledger = JsonOrders(path)
        user, payment = UserId.new(), PaymentId.new()

        order_id = await ledger.create(user, payment, (_item(),), Money.of("30.00"))

        [raw] = json.loads(path.read_text())
        assert raw["id"] == str(order_id)
        assert raw["payment_id"] == str(payment)
        assert raw["total"] == "30.00"
        assert raw["items"][0]["quantity"] == 2

    @pytest.mark.asyncio
    async def test_find_by_user(self, tmp_path):
        ledger = JsonOrders(tmp_path / "orders.json")
        alice, bob = UserId.new(), UserId.new()
        first = await ledger.create(alice, PaymentId.new(), (_item(),), Money.of("30.00"))
        await ledger.create(bob, PaymentId.new(), (_item(),), Money.of("30.00"))
        second = await ledger.create(alice, PaymentId.new(), (_item(qty=1),), Money.of("15.00"))

        records = ledger.find_by(alice)

        assert [r.id for r in records] == [str(first), str(second)]
        assert records[0].total == "$30.00"
        assert records[1].item_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_creates_are_all_recorded(self, tmp_path):
        ledger = JsonOrders(tmp_path / "orders.json")
        user = UserId.new()

        order_ids = await asyncio.gather(
            *(ledger.create(user, PaymentId.new(), (_item(),), Money.of("30.00")) for _ in range(5))
        )

        assert {r.id for r in ledger.find_by(user)} == {str(o) for o in order_ids}
