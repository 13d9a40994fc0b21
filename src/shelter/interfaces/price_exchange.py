"""Interface for the price-history exchange."""

import abc
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

# pylint: disable=too-few-public-methods


@dataclass(frozen=True, slots=True)
class PricePoint:
    """A single dated price observation.

    Raises:
        ValueError: If ``price`` is negative.
    """

    date: date
    price: Decimal

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"price must not be negative, got {self.price}")


class PriceExchange(abc.ABC):
    """Contract for the external price exchange."""

    @abc.abstractmethod
    async def get_price_history(self, breed_id: UUID) -> Sequence[PricePoint]:
        """Return the price history for a breed, oldest first; may be empty."""
