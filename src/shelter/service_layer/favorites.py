"""Favourites consistency maintainer.

Favourite entries are pruned lazily: an entry survives until a listing finds
that the cat it points at no longer resolves.
"""

from __future__ import annotations

import logging
from uuid import UUID

from shelter.domain.errors import InvalidRequestError
from shelter.domain.models import Cat
from shelter.interfaces.billing import BillingService
from shelter.interfaces.store import FavoriteEntry, ShelterStore

from .aggregator import CatalogAggregator
from .conversions import ConversionRegistry
from .executor import ResilientExecutor

logger = logging.getLogger(__name__)


class FavoritesMaintainer:
    """Add, list and remove favourites while keeping them consistent."""

    def __init__(
        self,
        executor: ResilientExecutor,
        store: ShelterStore,
        billing: BillingService,
        aggregator: CatalogAggregator,
        conversions: ConversionRegistry,
    ) -> None:
        self._executor = executor
        self._store = store
        self._billing = billing
        self._aggregator = aggregator
        self._conversions = conversions

    async def add(self, user_id: UUID, cat_id: UUID) -> None:
        """Mark ``cat_id`` as a favourite of ``user_id``.

        Raises:
            InvalidRequestError: If the ledger has no product for ``cat_id``
                (a stale persisted record is deleted first), or if there is no
                persisted record for it.
        """
        product = await self._executor.execute(
            lambda: self._billing.get_product(cat_id), label="billing.get_product"
        )
        record = await self._executor.execute(
            lambda: self._store.cats.get(cat_id), label="store.cats.get"
        )

        if product is None:
            if record is not None:
                logger.warning(
                    "Cat %s has no ledger product; removing stale record", cat_id
                )
                await self._executor.execute(
                    lambda: self._store.cats.delete(cat_id), label="store.cats.delete"
                )
            raise InvalidRequestError("no such cat in the ledger", cat_id)

        if record is None:
            raise InvalidRequestError("cat was never added to the shelter", cat_id)

        entry = self._conversions.convert((user_id, cat_id), FavoriteEntry)
        await self._executor.execute(
            lambda: self._store.favorites.write(entry), label="store.favorites.write"
        )
        logger.debug("User %s added cat %s to favourites", user_id, cat_id)

    async def list(self, user_id: UUID) -> list[Cat]:
        """Return the user's favourite cats that still resolve.

        Entries whose cat record is gone are deleted. Entries whose cat the
        aggregator rejects are skipped; the aggregator already removed the
        stale cat record.
        """
        entries = await self._executor.execute(
            lambda: self._store.favorites.find(lambda e: e.user_id == user_id),
            label="store.favorites.find",
        )

        result: list[Cat] = []
        for entry in entries:
            record = await self._executor.execute(
                lambda: self._store.cats.get(entry.cat_id), label="store.cats.get"
            )
            if record is None:
                logger.info(
                    "Pruning favourite %s of user %s: cat record is gone",
                    entry.cat_id,
                    user_id,
                )
                await self._executor.execute(
                    lambda: self._store.favorites.delete(entry.key),
                    label="store.favorites.delete",
                )
                continue

            cat = self._conversions.convert(record, Cat)
            if await self._aggregator.fetch_cat_data(cat):
                result.append(cat)

        return result

    async def remove(self, user_id: UUID, cat_id: UUID) -> None:
        """Delete the favourite; absent entries are not an error."""
        await self._executor.execute(
            lambda: self._store.favorites.delete((user_id, cat_id)),
            label="store.favorites.delete",
        )
