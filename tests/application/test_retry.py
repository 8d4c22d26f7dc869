"""Unit tests for the retry policy and the retry-with-logging executor."""

from __future__ import annotations

import asyncio

import pytest

from shop.application.retry import Backoff, RetryPolicy, describe_error, retrying
from shop.domain.exceptions import ValidationError
from tests.fakes import AccumulatingLogger, Counter


def _flaky(attempts: Counter, failures: int, result: str = "ok"):
    async def operation() -> str:
        if attempts.increment() <= failures:
            raise ValueError(f"failure #{attempts.value}")
        return result

    return operation


class _RecordingSleep:

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# ── RetryPolicy ──────────────────────────────────────────────────────────────


class TestRetryPolicy:

    def test_limit_retries_has_no_delay(self):
        policy = RetryPolicy.limit_retries(3)
        assert policy.max_retries == 3
        assert [policy.delay_before(n) for n in (1, 2, 3)] == [0.0, 0.0, 0.0]

    def test_constant_delay(self):
        policy = RetryPolicy.constant(3, delay=2.0)
        assert [policy.delay_before(n) for n in (1, 2, 3)] == [2.0, 2.0, 2.0]

    def test_exponential_delay_doubles(self):
        policy = RetryPolicy.exponential(4, base_delay=0.5)
        assert [policy.delay_before(n) for n in (1, 2, 3, 4)] == [0.5, 1.0, 2.0, 4.0]

    def test_exponential_delay_capped(self):
        policy = RetryPolicy.exponential(5, base_delay=1.0, max_delay=3.0)
        assert [policy.delay_before(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 3.0, 3.0]

    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            RetryPolicy(max_retries=-1)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            RetryPolicy(backoff=Backoff.CONSTANT, delay=-1.0)


# ── retrying() ───────────────────────────────────────────────────────────────


class TestRetrying:

    @pytest.mark.asyncio
    async def test_first_attempt_success_logs_nothing(self):
        attempts, logger = Counter(), AccumulatingLogger()

        result = await retrying(
            RetryPolicy.limit_retries(3), logger, "Payments", _flaky(attempts, 0)
        )

        assert result == "ok"
        assert attempts.value == 1
        assert logger.messages == []

    @pytest.mark.asyncio
    async def test_each_retry_is_logged(self):
        attempts, logger = Counter(), AccumulatingLogger()

        result = await retrying(
            RetryPolicy.limit_retries(3), logger, "Payments", _flaky(attempts, 2)
        )

        assert result == "ok"
        assert attempts.value == 3
        assert len(logger.messages) == 2
        assert "Failed to process Payments: failure #1" in logger.messages[0]
        assert "retried 0 times" in logger.messages[0]
        assert "retried 1 times" in logger.messages[1]

    @pytest.mark.asyncio
    async def test_exhaustion_reraises_last_error(self):
        attempts, logger = Counter(), AccumulatingLogger()

        with pytest.raises(ValueError, match="failure #4"):
            await retrying(
                RetryPolicy.limit_retries(3), logger, "Order", _flaky(attempts, 10)
            )

        assert attempts.value == 4
        assert len(logger.messages) == 4
        assert all("Retrying" in m for m in logger.messages[:3])
        assert logger.messages[-1] == "Giving up on Order after 3 retries."

    @pytest.mark.asyncio
    async def test_lambda_returning_coroutine_is_awaited(self):
        attempts, logger = Counter(), AccumulatingLogger()
        operation = _flaky(attempts, 1, result="paid")

        result = await retrying(
            RetryPolicy.limit_retries(3), logger, "Payments", lambda: operation()
        )

        assert result == "paid"
        assert attempts.value == 2
        assert len(logger.messages) == 1

    @pytest.mark.asyncio
    async def test_lambda_returning_failing_coroutine_gives_up(self):
        attempts, logger = Counter(), AccumulatingLogger()
        operation = _flaky(attempts, 10)

        with pytest.raises(ValueError, match="failure #3"):
            await retrying(
                RetryPolicy.limit_retries(2), logger, "Order", lambda: operation()
            )

        assert attempts.value == 3
        assert logger.messages[-1] == "Giving up on Order after 2 retries."

    @pytest.mark.asyncio
    async def test_zero_retries_runs_once(self):
        attempts, logger = Counter(), AccumulatingLogger()

        with pytest.raises(ValueError):
            await retrying(
                RetryPolicy.limit_retries(0), logger, "Order", _flaky(attempts, 1)
            )

        assert attempts.value == 1
        assert logger.messages == ["Giving up on Order after 0 retries."]

    @pytest.mark.asyncio
    async def test_waits_as_the_policy_reports(self):
        sleep = _RecordingSleep()

        await retrying(
            RetryPolicy.exponential(3, base_delay=0.25),
            AccumulatingLogger(),
            "Payments",
            _flaky(Counter(), 3),
            sleep=sleep,
        )

        assert sleep.delays == [0.25, 0.5, 1.0]

    @pytest.mark.asyncio
    async def test_cancellation_is_not_retried(self):
        attempts, logger = Counter(), AccumulatingLogger()

        async def cancelled() -> str:
            attempts.increment()
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await retrying(RetryPolicy.limit_retries(3), logger, "Order", cancelled)

        assert attempts.value == 1
        assert logger.messages == []


class TestDescribeError:

    def test_uses_message(self):
        assert describe_error(RuntimeError("boom")) == "boom"

    def test_falls_back_to_class_name(self):
        assert describe_error(TimeoutError()) == "TimeoutError"
