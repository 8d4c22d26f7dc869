"""Retry policy and the retry-with-logging executor.

The executor is shared by every remote step of the checkout: it runs an
operation under a RetryPolicy, records one "retrying" message per failed
attempt that will be retried, one "giving up" message once the policy is
exhausted, and re-raises the last error unchanged.

Usage:
    policy = RetryPolicy.exponential(max_retries=3, base_delay=0.5)
    payment_id = await retrying(policy, logger, "Payments", lambda: client.process(...))
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from shop.domain.exceptions import ValidationError
from shop.domain.ports.effects import Logger

T = TypeVar("T")


class Backoff(Enum):
    NONE = "none"
    CONSTANT = "constant"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry and how long to wait before each retry.

    ``max_retries`` counts retries, not attempts: a policy with three
    retries runs the operation at most four times.
    """

    max_retries: int = 3
    backoff: Backoff = Backoff.NONE
    delay: float = 0.0  # seconds; base delay for exponential backoff
    max_delay: float | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValidationError("max_retries cannot be negative")
        if self.delay < 0:
            raise ValidationError("Retry delay cannot be negative")
        if self.max_delay is not None and self.max_delay < 0:
            raise ValidationError("Maximum retry delay cannot be negative")

    def delay_before(self, retry_number: int) -> float:
        """Seconds to wait before retry number *retry_number* (1-based)."""
        if self.backoff is Backoff.NONE:
            return 0.0
        if self.backoff is Backoff.CONSTANT:
            seconds = self.delay
        else:
            seconds = self.delay * 2 ** (retry_number - 1)
        if self.max_delay is not None:
            seconds = min(seconds, self.max_delay)
        return seconds

    # tenacity wait strategy: attempt_number is the attempt that just failed,
    # which is also the number of the retry about to happen.
    def wait(self, retry_state: RetryCallState) -> float:
        return self.delay_before(retry_state.attempt_number)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def limit_retries(max_retries: int) -> RetryPolicy:
        """Retry immediately, up to *max_retries* times."""
        return RetryPolicy(max_retries=max_retries)

    @staticmethod
    def constant(max_retries: int, delay: float) -> RetryPolicy:
        return RetryPolicy(max_retries=max_retries, backoff=Backoff.CONSTANT, delay=delay)

    @staticmethod
    def exponential(
        max_retries: int, base_delay: float, max_delay: float | None = None
    ) -> RetryPolicy:
        return RetryPolicy(
            max_retries=max_retries,
            backoff=Backoff.EXPONENTIAL,
            delay=base_delay,
            max_delay=max_delay,
        )


def describe_error(exc: BaseException | None) -> str:
    """Human-readable error text, falling back to the class name."""
    if exc is None:
        return "unknown error"
    return str(exc) or type(exc).__name__


async def retrying(
    policy: RetryPolicy,
    logger: Logger,
    action: str,
    operation: Callable[[], Awaitable[T]],
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run *operation* under *policy*, logging every retry and the final give-up.

    Args:
        policy: Number of retries and delay strategy.
        logger: Sink for the retry / give-up messages.
        action: Name of the action, used in the messages (e.g. "Payments").
        operation: Zero-argument coroutine function, called once per attempt.
        sleep: Coroutine used to wait between attempts.

    Returns:
        The result of the first successful attempt.

    Raises:
        Exception: The error of the last attempt, once the policy is exhausted.
    """

    def log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.error(
            f"Failed to process {action}: {describe_error(error)}. "
            f"Retrying, so far we have retried {retry_state.attempt_number - 1} times."
        )

    retryer = AsyncRetrying(
        stop=stop_after_attempt(policy.max_retries + 1),
        wait=policy.wait,
        retry=retry_if_exception_type(Exception),
        before_sleep=log_retry,
        sleep=sleep,
        reraise=True,
    )

    # tenacity only awaits callables it recognises as coroutine functions;
    # call sites pass lambdas returning coroutines.
    async def attempt() -> T:
        return await operation()

    try:
        return await retryer(attempt)
    except Exception:
        logger.error(f"Giving up on {action} after {policy.max_retries} retries.")
        raise
