"""CLI commands for checkout and orders."""

from __future__ import annotations

import asyncio

import click

from shop.domain.exceptions import DomainException, EmptyCartError, OrderError, PaymentError
from shop.domain.model.value_objects import Card, OrderId, UserId
from shop.infrastructure import bootstrap
from shop.infrastructure.background import AsyncioBackground
from shop.infrastructure.config import Settings


async def _run_checkout(settings: Settings, user_id: UserId, card: Card) -> OrderId:
    background = AsyncioBackground()
    payment = bootstrap.payment_client(settings)
    program = bootstrap.checkout_program(settings, payment, background)
    try:
        return await program.checkout(user_id, card)
    finally:
        # A one-shot process cannot keep background work alive; pending
        # reconciliations are dropped and reported through the OrderError.
        await background.shutdown()
        await payment.close()


@click.command("checkout")
@click.option("--user", "user", required=True, help="User id (UUID).")
@click.option("--card-name", required=True, help="Card holder name.")
@click.option("--card-number", required=True, help="16-digit card number.")
@click.option("--card-expiration", required=True, help="Expiration as MMYY.")
@click.option("--card-cvv", required=True, help="3-digit security code.")
@click.pass_obj
def checkout(
    settings: Settings,
    user: str,
    card_name: str,
    card_number: str,
    card_expiration: str,
    card_cvv: str,
) -> None:
    """Pay for a user's cart and create the order."""
    try:
        user_id = UserId.parse(user)
        card = Card(name=card_name, number=card_number, expiration=card_expiration, cvv=card_cvv)
        order_id = asyncio.run(_run_checkout(settings, user_id, card))
    except EmptyCartError:
        raise click.ClickException("Cart is empty. Add items before checking out.")
    except PaymentError as exc:
        raise click.ClickException(f"{exc}. Check the payment method and try again.")
    except OrderError as exc:
        # The background reconciliation was cancelled with this process.
        raise click.ClickException(
            f"{exc}. Payment {exc.payment_id} was captured but no order was "
            "recorded, and this command cannot keep retrying after it exits. "
            "Keep the payment id for manual follow-up."
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} created.")


@click.command("orders")
@click.option("--user", "user", required=True, help="User id (UUID).")
@click.pass_obj
def orders_list(settings: Settings, user: str) -> None:
    """List the orders of a user."""
    try:
        records = bootstrap.orders(settings).find_by(UserId.parse(user))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not records:
        click.echo("No orders.")
        return

    for record in records:
        click.echo(
            f"{record.id}  {record.created_at}  items={record.item_count}  "
            f"total={record.total}  payment={record.payment_id}"
        )
