"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TypeVar

from shop.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


# --- Identifiers --------------------------------------------------------------

IdT = TypeVar("IdT", bound="_Identifier")


@dataclass(frozen=True)
class _Identifier:
    """Opaque UUID-based identifier."""

    value: uuid.UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, uuid.UUID):
            raise ValidationError(
                f"{type(self).__name__} must wrap a UUID, got {type(self.value).__name__}"
            )

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def new(cls: type[IdT]) -> IdT:
        return cls(uuid.uuid4())

    @classmethod
    def parse(cls: type[IdT], raw: str) -> IdT:
        try:
            return cls(uuid.UUID(str(raw)))
        except ValueError as exc:
            raise ValidationError(f"Invalid {cls.__name__}: {raw!r}") from exc


class UserId(_Identifier):
    """The customer performing a checkout."""


class ItemId(_Identifier):
    """A catalogue item placed in a cart."""


class PaymentId(_Identifier):
    """Proof of a completed charge."""


class OrderId(_Identifier):
    """An order recorded in the order ledger."""


# --- Card ---------------------------------------------------------------------

_CARD_NUMBER = re.compile(r"^\d{16}$")
_CARD_EXPIRATION = re.compile(r"^\d{4}$")
_CARD_CVV = re.compile(r"^\d{3}$")


@dataclass(frozen=True)
class Card:
    """Payment instrument supplied for a single checkout attempt.

    Never persisted: it is only forwarded to the payment collaborator.
    """

    name: str
    number: str
    expiration: str  # MMYY
    cvv: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValidationError("Card holder name must not be empty")
        if not _CARD_NUMBER.match(self.number):
            raise ValidationError("Card number must have 16 digits")
        if not _CARD_EXPIRATION.match(self.expiration):
            raise ValidationError("Card expiration must have 4 digits (MMYY)")
        if not _CARD_CVV.match(self.cvv):
            raise ValidationError("Card CVV must have 3 digits")

    def __repr__(self) -> str:
        return f"Card(name={self.name!r}, number='************{self.number[-4:]}')"
