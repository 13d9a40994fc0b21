"""Unit tests for the resilient call executor.

Covers the three failure tiers (cancellation, transient, fatal), the
transient-failure counter, retry exhaustion and the delay between attempts.
"""

from __future__ import annotations

import asyncio

import pytest

from shelter.adapters.metrics import InMemoryMetrics
from shelter.domain.errors import AggregateFailure, ConfigurationError, InternalError
from shelter.interfaces.errors import ConnectionFailure
from shelter.service_layer import executor as executor_module
from shelter.service_layer.executor import ResilientExecutor

# pylint: disable=redefined-outer-name


class Script:
    """Awaitable factory that replays a fixed sequence of outcomes.

    Each item is either an exception (raised) or a value (returned).
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.attempts = 0

    async def __call__(self):
        self.attempts += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def metrics():
    """Fresh metrics sink."""
    return InMemoryMetrics()


@pytest.fixture
def executor(metrics):
    """Executor with the default policy: 2 attempts, no delay."""
    return ResilientExecutor(metrics)


class TestSuccess:
    """Calls that eventually succeed."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_returns_result_of_first_attempt(executor, metrics):
        """A successful first attempt returns its value and records nothing."""
        op = Script("ok")
        assert await executor.execute(op) == "ok"
        assert op.attempts == 1
        assert not metrics.snapshot()

    @staticmethod
    @pytest.mark.asyncio
    async def test_transient_then_success_matches_immediate_success(executor, metrics):
        """A retried call yields the same result; the counter grows by the failures."""
        immediate = await executor.execute(Script(42))

        op = Script(ConnectionFailure("billing"), 42)
        retried = await executor.execute(op)

        assert retried == immediate
        assert op.attempts == 2
        assert metrics.get("ConnectionFailure_thrown") == 1

    @staticmethod
    @pytest.mark.asyncio
    async def test_per_call_max_attempts_override(executor, metrics):
        """``max_attempts`` on the call overrides the executor default."""
        op = Script(
            ConnectionFailure("billing"),
            ConnectionFailure("billing"),
            ConnectionFailure("billing"),
            "late",
        )
        assert await executor.execute(op, max_attempts=4) == "late"
        assert metrics.get("ConnectionFailure_thrown") == 3


class TestExhaustion:
    """Every attempt fails transiently."""

    @staticmethod
    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts", [1, 2, 5])
    async def test_raises_internal_error(metrics, attempts):
        """Exhaustion raises InternalError, never the raw transient error."""
        executor = ResilientExecutor(metrics, max_attempts=attempts)
        failures = [ConnectionFailure("exchange") for _ in range(attempts)]
        op = Script(*failures)

        with pytest.raises(InternalError) as exc_info:
            await executor.execute(op)

        assert not isinstance(exc_info.value, ConnectionFailure)
        assert exc_info.value.__cause__ is failures[-1]
        assert op.attempts == attempts
        assert metrics.get("ConnectionFailure_thrown") == attempts

    @staticmethod
    @pytest.mark.asyncio
    async def test_builtin_transient_errors_are_counted_by_type(executor, metrics):
        """ConnectionError and TimeoutError are retried and counted by type name."""
        with pytest.raises(InternalError):
            await executor.execute(Script(ConnectionResetError(), TimeoutError()))

        assert metrics.get("ConnectionResetError_thrown") == 1
        assert metrics.get("TimeoutError_thrown") == 1


class TestFatal:
    """Non-transient failures stop the loop."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_fatal_on_first_attempt(executor, metrics):
        """A fatal error aborts at once, wrapped with nothing else."""
        boom = ValueError("boom")
        op = Script(boom, "never")

        with pytest.raises(AggregateFailure) as exc_info:
            await executor.execute(op)

        assert op.attempts == 1
        assert exc_info.value.exceptions == (boom,)
        assert exc_info.value.fatal is boom
        assert exc_info.value.__cause__ is boom
        assert not metrics.snapshot()

    @staticmethod
    @pytest.mark.asyncio
    async def test_fatal_after_transient_keeps_earlier_failures(metrics):
        """Attempt k+1 never runs; earlier transient failures travel with the fatal one."""
        executor = ResilientExecutor(metrics, max_attempts=5)
        transient = ConnectionFailure("breeds")
        fatal = KeyError("missing")
        op = Script(transient, fatal, "never")

        with pytest.raises(AggregateFailure) as exc_info:
            await executor.execute(op)

        assert op.attempts == 2
        assert exc_info.value.exceptions == (transient, fatal)
        assert "received 2 exceptions" in str(exc_info.value)
        assert metrics.get("ConnectionFailure_thrown") == 1


class TestCancellation:
    """Cancellation is never retried or wrapped."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_cancelled_error_propagates_unwrapped(executor, metrics):
        """CancelledError from the operation propagates after a single attempt."""
        op = Script(asyncio.CancelledError(), "never")

        with pytest.raises(asyncio.CancelledError):
            await executor.execute(op)

        assert op.attempts == 1
        assert not metrics.snapshot()

    @staticmethod
    @pytest.mark.asyncio
    async def test_cancel_during_retry_delay(executor):
        """Cancelling the task while it waits between attempts stops the retries."""
        op = Script(ConnectionFailure("billing"), "never")
        task = asyncio.create_task(executor.execute(op, delay=30))
        while op.attempts == 0:
            await asyncio.sleep(0)
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert op.attempts == 1


class TestDelay:
    """The delay applies only between attempts of the same call."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_sleeps_between_attempts_only(metrics, monkeypatch):
        """Three failing attempts sleep twice, never after the last one."""
        sleeps: list[float] = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)

        monkeypatch.setattr(executor_module.asyncio, "sleep", fake_sleep)
        executor = ResilientExecutor(metrics, max_attempts=3, delay=0.25)

        with pytest.raises(InternalError):
            await executor.execute(Script(*(TimeoutError() for _ in range(3))))

        assert sleeps == [0.25, 0.25]

    @staticmethod
    @pytest.mark.asyncio
    async def test_zero_delay_never_sleeps(executor, monkeypatch):
        """With no delay configured the executor does not sleep at all."""
        sleeps: list[float] = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)

        monkeypatch.setattr(executor_module.asyncio, "sleep", fake_sleep)
        await executor.execute(Script(ConnectionFailure("store"), "ok"))
        assert not sleeps


class TestPolicyValidation:
    """Out-of-range policies are configuration errors."""

    @staticmethod
    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"delay": -1.0}])
    def test_constructor_rejects_bad_policy(metrics, kwargs):
        """The executor refuses a policy it cannot honour."""
        with pytest.raises(ConfigurationError):
            ResilientExecutor(metrics, **kwargs)

    @staticmethod
    @pytest.mark.asyncio
    async def test_execute_rejects_bad_override(executor):
        """A per-call override is validated as well."""
        op = Script("never")
        with pytest.raises(ConfigurationError):
            await executor.execute(op, max_attempts=0)
        assert op.attempts == 0
