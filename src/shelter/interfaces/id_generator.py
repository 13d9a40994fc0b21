"""Interface for ID generators."""

import abc
from uuid import UUID

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for an ID generator."""

    @abc.abstractmethod
    def new_id(self) -> UUID:
        """Generate a new unique identifier."""
