"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shop.application.checkout import CheckoutProgram
from shop.domain.ports.effects import BackgroundScheduler
from shop.infrastructure.clients.http_payment_client import HttpPaymentClient
from shop.infrastructure.config import Settings
from shop.infrastructure.logger import LoguruLogger
from shop.infrastructure.persistence.json_orders import JsonOrders
from shop.infrastructure.persistence.json_shopping_cart import JsonShoppingCart


def shopping_cart(settings: Settings) -> JsonShoppingCart:
    return JsonShoppingCart(settings.data_dir / "carts.json")


def orders(settings: Settings) -> JsonOrders:
    return JsonOrders(settings.data_dir / "orders.json")


def payment_client(settings: Settings) -> HttpPaymentClient:
    return HttpPaymentClient(settings.payment_url, timeout=settings.payment_timeout)


def checkout_program(
    settings: Settings,
    payment: HttpPaymentClient,
    background: BackgroundScheduler,
) -> CheckoutProgram:
    return CheckoutProgram(
        payment_client=payment,
        shopping_cart=shopping_cart(settings),
        orders=orders(settings),
        retry_policy=settings.retry_policy(),
        logger=LoguruLogger(),
        background=background,
        reschedule_delay=settings.reschedule_delay,
    )
