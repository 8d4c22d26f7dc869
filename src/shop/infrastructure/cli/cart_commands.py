"""CLI commands for shopping carts."""

from __future__ import annotations

import asyncio

import click

from shop.domain.exceptions import DomainException
from shop.domain.model.cart import CartItem
from shop.domain.model.value_objects import ItemId, Money, Quantity, UserId
from shop.infrastructure import bootstrap
from shop.infrastructure.config import Settings


@click.command("add")
@click.option("--user", "user", required=True, help="User id (UUID).")
@click.option("--item", "item", default=None, help="Item id (UUID); generated when omitted.")
@click.option("--name", required=True, help="Item name.")
@click.option("--price", required=True, help="Unit price, e.g. 15.00.")
@click.option("--qty", required=True, type=int, help="Quantity.")
@click.pass_obj
def cart_add(settings: Settings, user: str, item: str | None, name: str, price: str, qty: int) -> None:
    """Put an item in a user's cart (replaces the quantity if already there)."""
    try:
        cart_item = CartItem(
            item_id=ItemId.parse(item) if item else ItemId.new(),
            name=name,
            quantity=Quantity(qty),
            unit_price=Money.of(price),
        )
        asyncio.run(bootstrap.shopping_cart(settings).add(UserId.parse(user), cart_item))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {cart_item.quantity} x {cart_item.name} ({cart_item.item_id})")


@click.command("show")
@click.option("--user", "user", required=True, help="User id (UUID).")
@click.pass_obj
def cart_show(settings: Settings, user: str) -> None:
    """Show the contents of a user's cart."""
    try:
        cart = asyncio.run(bootstrap.shopping_cart(settings).get(UserId.parse(user)))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if cart.is_empty:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in cart.items:
        click.echo(
            f"  {item.name:<20} {item.quantity.value:>5} {str(item.unit_price):>10} {str(item.subtotal):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {str(cart.total):>20}")
