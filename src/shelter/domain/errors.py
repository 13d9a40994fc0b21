"""Domain-layer error definitions.

Every use case surfaces exactly one of these (or ``asyncio.CancelledError``,
which is never wrapped).
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

# ============================================================================
#                           General errors
# ============================================================================


class ShelterError(Exception):
    """Base class for all SHELTER errors."""


class AuthorizationError(ShelterError):
    """Raised when a session fails authorization."""

    def __init__(self, message: str = "Session is invalid or expired.") -> None:
        super().__init__(message)


class InvalidRequestError(ShelterError):
    """Raised when a referenced entity is absent or inconsistent."""

    def __init__(self, reason: str, cat_id: UUID | None = None) -> None:
        message = reason if cat_id is None else f"Cat {cat_id}: {reason}"
        super().__init__(message)
        self.reason = reason
        self.cat_id = cat_id


class ConfigurationError(ShelterError):
    """Raised on a programming or deployment defect (never user-facing)."""


# ============================================================================
#                   Outbound call failures
# ============================================================================


class InternalError(ShelterError):
    """Raised when a collaborator call exhausted its retry budget."""

    def __init__(self, message: str = "Internal error while calling a collaborator.") -> None:
        super().__init__(message)


class AggregateFailure(ShelterError):
    """Raised when a collaborator call failed with a non-transient error.

    Attributes:
        exceptions: Every failure observed during the call, in order. The
            transient failures recorded by earlier attempts come first and the
            fatal exception is last.
    """

    def __init__(self, exceptions: Sequence[BaseException]) -> None:
        super().__init__(
            "Call was unsuccessful, received "
            f"{len(exceptions)} exceptions while executing"
        )
        self.exceptions = tuple(exceptions)

    @property
    def fatal(self) -> BaseException:
        """The exception that stopped the retry loop."""
        return self.exceptions[-1]
