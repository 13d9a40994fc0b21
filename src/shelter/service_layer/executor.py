"""Resilient execution of collaborator calls.

Every call to an external collaborator (authorization, billing, breed catalog,
price exchange, persisted store) goes through `ResilientExecutor.execute`.
Failures fall into three tiers:

| Failure                              | Handling                                      |
|--------------------------------------|-----------------------------------------------|
| ``asyncio.CancelledError``           | re-raised at once; no retry, no wrapping      |
| transient (``ConnectionFailure``, …) | recorded, counted, retried after ``delay``    |
| anything else                        | `AggregateFailure` with all failures so far   |

Running out of attempts with only transient failures raises `InternalError`,
never the transient error itself.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from shelter.domain.errors import AggregateFailure, ConfigurationError, InternalError
from shelter.interfaces.errors import ConnectionFailure
from shelter.interfaces.metrics import MetricsSink

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Exception types treated as retryable connectivity failures.
TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    ConnectionFailure,
    ConnectionError,
    TimeoutError,
)


class ResilientExecutor:
    """Run collaborator calls under a bounded retry policy.

    Args:
        metrics: Sink receiving one ``"<ExceptionType>_thrown"`` increment per
            transient failure.
        max_attempts: Default number of attempts per call, first included.
        delay: Default seconds to wait between attempts of the same call.
        transient_errors: Exception types that are retried.

    Raises:
        ConfigurationError: If the defaults are out of range.
    """

    def __init__(
        self,
        metrics: MetricsSink,
        max_attempts: int = 2,
        delay: float = 0.0,
        transient_errors: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
    ) -> None:
        _check_policy(max_attempts, delay)
        self.metrics = metrics
        self.max_attempts = max_attempts
        self.delay = delay
        self.transient_errors = transient_errors

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        max_attempts: int | None = None,
        delay: float | None = None,
        label: str | None = None,
    ) -> T:
        """Await ``operation()`` until it succeeds or the policy gives up.

        Args:
            operation: Zero-argument callable producing a fresh awaitable per
                attempt.
            max_attempts: Overrides the executor default for this call.
            delay: Overrides the executor default for this call.
            label: Name used in log messages; defaults to the callable's name.

        Returns:
            The operation's result.

        Raises:
            asyncio.CancelledError: Propagated untouched.
            AggregateFailure: On the first non-transient failure.
            InternalError: When every attempt failed transiently.
        """
        attempts = self.max_attempts if max_attempts is None else max_attempts
        pause = self.delay if delay is None else delay
        _check_policy(attempts, pause)
        name = label or _operation_name(operation)

        failures: list[Exception] = []
        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except asyncio.CancelledError:
                raise
            except self.transient_errors as e:
                self.metrics.increment(f"{type(e).__name__}_thrown")
                failures.append(e)
                logger.warning(
                    "%s failed transiently (attempt %d/%d): %s",
                    name,
                    attempt,
                    attempts,
                    e,
                )
            except Exception as e:  # pylint: disable=broad-except
                failures.append(e)
                logger.debug("%s failed fatally on attempt %d: %r", name, attempt, e)
                raise AggregateFailure(failures) from e

            if pause > 0 and attempt < attempts:
                await asyncio.sleep(pause)

        logger.error("%s gave up after %d attempts", name, attempts)
        raise InternalError(f"{name} failed after {attempts} attempts") from failures[-1]


def _check_policy(max_attempts: int, delay: float) -> None:
    if max_attempts < 1:
        raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
    if delay < 0:
        raise ConfigurationError(f"delay must not be negative, got {delay}")


def _operation_name(operation: Callable[..., object]) -> str:
    if hasattr(operation, "__qualname__"):
        return operation.__qualname__
    if hasattr(operation, "func") and hasattr(operation.func, "__qualname__"):
        return operation.func.__qualname__
    return repr(operation)
