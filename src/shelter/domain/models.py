"""Domain objects returned to SHELTER callers.

`Cat` is a view, never persisted: it is rebuilt on every read from the
persisted record, the ledger product, the breed catalog and the price
history.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

#: Price used when a breed has no price history at all.
DEFAULT_PRICE = Decimal(1000)


class _Dated(Protocol):  # pylint: disable=too-few-public-methods
    date: date
    price: Decimal


def chronological(prices: Iterable[_Dated]) -> list[_Dated]:
    """Return the price points ordered by date (stable for equal dates)."""
    return sorted(prices, key=lambda point: point.date)


def current_price(prices: Sequence[_Dated]) -> Decimal:
    """Price of a breed given its history.

    The chronologically last entry wins, whatever order the history was
    stored in. An empty history prices at `DEFAULT_PRICE`.
    """
    if not prices:
        return DEFAULT_PRICE
    return chronological(prices)[-1].price


@dataclass(slots=True)
class Cat:  # pylint: disable=too-many-instance-attributes
    """A cat as presented to callers.

    Only ``id``, ``added_by``, ``name`` and ``photo`` come from the persisted
    record; the remaining fields are filled in place by the catalog
    aggregator.
    """

    id: UUID
    added_by: UUID
    name: str
    photo: bytes | None = None
    breed_id: UUID | None = None
    breed: str | None = None
    breed_photo: bytes | None = None
    prices: list[tuple[date, Decimal]] = field(default_factory=list)
    price: Decimal = DEFAULT_PRICE


@dataclass(frozen=True, slots=True)
class AddCatRequest:
    """Request to put a new cat up for sale."""

    name: str
    breed: str
    photo: bytes | None = None
