"""Interface for the session authorization service."""

import abc
from dataclasses import dataclass
from uuid import UUID

# pylint: disable=too-few-public-methods


@dataclass(frozen=True, slots=True)
class AuthorizationResult:
    """Outcome of authorizing a session token."""

    success: bool
    user_id: UUID | None = None


class AuthorizationService(abc.ABC):
    """Contract for the external authorization service."""

    @abc.abstractmethod
    async def authorize(self, session: str) -> AuthorizationResult:
        """Authorize an opaque, caller-supplied session token.

        Args:
            session: The session token.

        Returns:
            AuthorizationResult: ``success`` is False for an unknown or
            expired session; ``user_id`` is set only on success.
        """
