"""Interface for the billing ledger.

The ledger is the system of record for product existence: the absence of a
product for a known identifier is the authoritative signal that the cat no
longer exists.
"""

import abc
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Product:
    """A sellable ledger item; its ``id`` is shared with the persisted cat record."""

    id: UUID
    breed_id: UUID


@dataclass(frozen=True, slots=True)
class Bill:
    """Record of a completed sale."""

    id: UUID
    product_id: UUID
    price: Decimal


class BillingService(abc.ABC):
    """Contract for the external billing ledger."""

    @abc.abstractmethod
    async def get_product(self, product_id: UUID) -> Product | None:
        """Return the product for ``product_id``, or None if the ledger has none."""

    @abc.abstractmethod
    async def get_products(self, skip: int, limit: int) -> Sequence[Product]:
        """Return one page of products in ledger order.

        Args:
            skip: Number of products to skip from the start of the listing.
            limit: Maximum number of products to return.
        """

    @abc.abstractmethod
    async def add_product(self, product: Product) -> None:
        """Register a new product with the ledger."""

    @abc.abstractmethod
    async def sell_product(self, product_id: UUID, price: Decimal) -> Bill:
        """Record the sale of ``product_id`` at ``price`` and return the bill."""
