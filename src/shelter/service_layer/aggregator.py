"""Catalog aggregator: merges ledger, catalog and exchange data into a `Cat`."""

from __future__ import annotations

import logging

from shelter.domain.models import Cat, chronological, current_price
from shelter.interfaces.billing import BillingService, Product
from shelter.interfaces.breed_catalog import BreedCatalog
from shelter.interfaces.price_exchange import PriceExchange
from shelter.interfaces.store import ShelterStore

from .executor import ResilientExecutor

logger = logging.getLogger(__name__)


class CatalogAggregator:
    """Enrich partially-populated cats from the external collaborators.

    The ledger is authoritative: a cat whose product is gone is removed from
    the persisted store instead of being returned.
    """

    def __init__(
        self,
        executor: ResilientExecutor,
        store: ShelterStore,
        billing: BillingService,
        breeds: BreedCatalog,
        exchange: PriceExchange,
    ) -> None:
        self._executor = executor
        self._store = store
        self._billing = billing
        self._breeds = breeds
        self._exchange = exchange

    async def fetch_cat_data(self, cat: Cat, known_product: Product | None = None) -> bool:
        """Fill in breed, price history and price for ``cat`` in place.

        Args:
            cat: A cat carrying only its persisted fields.
            known_product: The cat's ledger product when the caller already
                has it; it is fetched otherwise.

        Returns:
            bool: True if the cat was enriched. False if the ledger has no
            product for it, in which case its persisted record has been
            deleted and the caller must discard ``cat``.
        """
        product = known_product
        if product is None:
            product = await self._executor.execute(
                lambda: self._billing.get_product(cat.id), label="billing.get_product"
            )

        if product is None:
            logger.warning("Cat %s has no ledger product; removing stale record", cat.id)
            await self._executor.execute(
                lambda: self._store.cats.delete(cat.id), label="store.cats.delete"
            )
            return False

        breed = await self._executor.execute(
            lambda: self._breeds.find_by_breed_id(product.breed_id),
            label="breeds.find_by_breed_id",
        )
        history = await self._executor.execute(
            lambda: self._exchange.get_price_history(product.breed_id),
            label="exchange.get_price_history",
        )

        cat.breed_id = product.breed_id
        cat.breed = breed.breed_name
        cat.breed_photo = breed.breed_photo
        cat.prices = [(point.date, point.price) for point in chronological(history)]
        cat.price = current_price(history)
        return True
