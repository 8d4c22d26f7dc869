"""Application service: Checkout use case.

Coordinates the shopping cart, the payment processor and the order ledger
into one checkout attempt:

1. Fetch the cart snapshot (fail fast on an empty cart).
2. Charge the card, retrying under the configured policy.
3. Create the order, retrying under the same policy. If that is exhausted
   the payment has already been captured, so order creation is handed to a
   background task before the caller is told the order is pending.
4. Delete the cart, best effort.

Checkout is not idempotent: calling it twice with the same user and card
charges twice. Concurrent checkouts for the same user are not serialized.
"""

from __future__ import annotations

from shop.application.retry import RetryPolicy, describe_error, retrying
from shop.domain.exceptions import EmptyCartError, OrderError, PaymentError
from shop.domain.model.cart import CartItem
from shop.domain.model.value_objects import Card, Money, OrderId, PaymentId, UserId
from shop.domain.ports.effects import BackgroundScheduler, Logger
from shop.domain.ports.orders import Orders
from shop.domain.ports.payment_client import PaymentClient
from shop.domain.ports.shopping_cart import ShoppingCart

DEFAULT_RESCHEDULE_DELAY = 3600.0  # seconds


class CheckoutProgram:

    def __init__(
        self,
        payment_client: PaymentClient,
        shopping_cart: ShoppingCart,
        orders: Orders,
        retry_policy: RetryPolicy,
        logger: Logger,
        background: BackgroundScheduler,
        reschedule_delay: float = DEFAULT_RESCHEDULE_DELAY,
    ) -> None:
        self._payment_client = payment_client
        self._shopping_cart = shopping_cart
        self._orders = orders
        self._retry_policy = retry_policy
        self._logger = logger
        self._background = background
        self._reschedule_delay = reschedule_delay

    async def checkout(self, user_id: UserId, card: Card) -> OrderId:
        """Charge the cart of *user_id* to *card* and return the new order id.

        Raises:
            EmptyCartError: The cart has no items; nothing happened.
            PaymentError: Every payment attempt failed; nothing was charged.
            OrderError: Payment was captured but the order is still pending;
                a background task keeps trying to create it.
        """
        cart = await self._shopping_cart.get(user_id)
        if cart.is_empty:
            raise EmptyCartError()

        payment_id = await self._process_payment(user_id, cart.total, card)
        order_id = await self._create_order(user_id, payment_id, cart.items, cart.total)

        try:
            await self._shopping_cart.delete(user_id)
        except Exception as exc:
            self._logger.error(
                f"Failed to delete cart of user {user_id} after order {order_id}: "
                f"{describe_error(exc)}"
            )

        return order_id

    # --- Steps ----------------------------------------------------------------

    async def _process_payment(self, user_id: UserId, total: Money, card: Card) -> PaymentId:
        try:
            return await retrying(
                self._retry_policy,
                self._logger,
                "Payments",
                lambda: self._payment_client.process(user_id, total, card),
            )
        except PaymentError:
            raise
        except Exception as exc:
            raise PaymentError(describe_error(exc)) from exc

    async def _create_order(
        self,
        user_id: UserId,
        payment_id: PaymentId,
        items: tuple[CartItem, ...],
        total: Money,
    ) -> OrderId:
        try:
            return await self._create_order_with_retries(user_id, payment_id, items, total)
        except OrderError:
            self._reschedule_order(user_id, payment_id, items, total)
            raise

    async def _create_order_with_retries(
        self,
        user_id: UserId,
        payment_id: PaymentId,
        items: tuple[CartItem, ...],
        total: Money,
    ) -> OrderId:
        try:
            return await retrying(
                self._retry_policy,
                self._logger,
                "Order",
                lambda: self._orders.create(user_id, payment_id, items, total),
            )
        except Exception as exc:
            detail = exc.detail if isinstance(exc, OrderError) else describe_error(exc)
            raise OrderError(detail, payment_id=payment_id) from exc

    # --- Background reconciliation --------------------------------------------

    def _reschedule_order(
        self,
        user_id: UserId,
        payment_id: PaymentId,
        items: tuple[CartItem, ...],
        total: Money,
    ) -> None:
        """Hand order creation for a captured payment to the background.

        The task re-submits itself every time the retry policy is exhausted,
        until an order exists for *payment_id*. It does not delete the cart.
        """
        self._logger.error(
            f"Failed to create order for payment {payment_id}. "
            "Rescheduling as a background action"
        )

        async def create_in_background() -> None:
            try:
                order_id = await self._create_order_with_retries(
                    user_id, payment_id, items, total
                )
            except OrderError:
                self._reschedule_order(user_id, payment_id, items, total)
            else:
                self._logger.info(
                    f"Order {order_id} created in the background for payment {payment_id}"
                )

        self._background.schedule(create_in_background, self._reschedule_delay)
