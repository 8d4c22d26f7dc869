"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The checkout taxonomy (CheckoutError and its subclasses) is what a failed
checkout surfaces to the caller. Each kind tells the caller what to do next:
fix the cart, fix the payment method, or wait for the pending order.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CheckoutError(DomainException):
    """Base class for the errors a checkout attempt can end with."""


class EmptyCartError(CheckoutError):
    """The cart has no items; nothing was charged."""

    def __init__(self) -> None:
        super().__init__("Cart is empty")


class PaymentError(CheckoutError):
    """The payment could not be processed; nothing was charged."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Payment failed: {detail}")


class OrderError(CheckoutError):
    """Payment was captured but the order could not be created yet.

    A background task keeps trying to create the order for the captured
    payment, identified by ``payment_id`` when it is known.
    """

    def __init__(self, detail: str, payment_id: object | None = None) -> None:
        self.detail = detail
        self.payment_id = payment_id
        super().__init__(f"Order creation failed: {detail}")
