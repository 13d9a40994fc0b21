"""Shelter facade: the use cases offered to callers.

Every use case counts its invocation, authorizes the session and then
orchestrates the aggregator, the favourites maintainer and direct
collaborator calls. All outbound calls go through the `ResilientExecutor`.
"""

from __future__ import annotations

import logging
import sys
from uuid import UUID

from shelter.domain.errors import AuthorizationError, InvalidRequestError
from shelter.domain.models import AddCatRequest, Cat, current_price
from shelter.interfaces.authorization import AuthorizationService
from shelter.interfaces.billing import Bill, BillingService, Product
from shelter.interfaces.breed_catalog import BreedCatalog
from shelter.interfaces.id_generator import IdGenerator
from shelter.interfaces.metrics import MetricsSink
from shelter.interfaces.price_exchange import PriceExchange
from shelter.interfaces.store import CatRecord, ShelterStore

from .aggregator import CatalogAggregator
from .conversions import ConversionRegistry, default_registry
from .executor import ResilientExecutor
from .favorites import FavoritesMaintainer

logger = logging.getLogger(__name__)


class ShelterService:  # pylint: disable=too-many-instance-attributes
    """Authenticated, self-repairing view over the shelter's collaborators.

    Args:
        executor: Runs every collaborator call under the retry policy.
        authorization: Session authorization service.
        billing: Product ledger; authoritative for cat existence.
        breeds: Breed catalog.
        exchange: Price history source.
        store: Persisted cat records and favourites.
        id_generator: Mints identifiers for new cats.
        metrics: Sink for ``"<use case>_called"`` and inventory counts.
        conversions: Record/domain conversions; `default_registry()` if omitted.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        *,
        executor: ResilientExecutor,
        authorization: AuthorizationService,
        billing: BillingService,
        breeds: BreedCatalog,
        exchange: PriceExchange,
        store: ShelterStore,
        id_generator: IdGenerator,
        metrics: MetricsSink,
        conversions: ConversionRegistry | None = None,
    ) -> None:
        self.executor = executor
        self.authorization = authorization
        self.billing = billing
        self.breeds = breeds
        self.exchange = exchange
        self.store = store
        self.id_generator = id_generator
        self.metrics = metrics
        self.conversions = conversions or default_registry()
        self.aggregator = CatalogAggregator(executor, store, billing, breeds, exchange)
        self.favorites = FavoritesMaintainer(
            executor, store, billing, self.aggregator, self.conversions
        )

    # ------------------------------------------------------------------ cats

    async def get_cats(self, session: str, skip: int, limit: int) -> list[Cat]:
        """List one page of cats in ledger order.

        Ledger products without a persisted record are skipped and left
        alone; they may still be waiting for their record to be written.

        Raises:
            AuthorizationError: If the session is rejected.
            InvalidRequestError: If ``skip`` is negative or ``limit`` is not
                positive.
        """
        self.metrics.increment("get_cats_called")
        await self._authorize(session)
        if skip < 0 or limit <= 0:
            raise InvalidRequestError(
                f"invalid page (skip={skip}, limit={limit}); "
                "skip must be >= 0 and limit > 0"
            )

        products = await self.executor.execute(
            lambda: self.billing.get_products(skip, limit), label="billing.get_products"
        )

        cats: list[Cat] = []
        for product in products:
            record = await self._get_record(product.id)
            if record is None:
                logger.debug("Product %s has no persisted record yet; skipping", product.id)
                continue
            cat = self.conversions.convert(record, Cat)
            if await self.aggregator.fetch_cat_data(cat, known_product=product):
                cats.append(cat)
        return cats

    async def add_cat(self, session: str, request: AddCatRequest) -> UUID:
        """Put a new cat up for sale and return its identifier.

        The product is registered with the ledger before the record is
        persisted. A failure in between leaves a ledger product with no
        record, which listings skip.

        Raises:
            AuthorizationError: If the session is rejected.
            InvalidRequestError: If the name or breed is blank, or the breed
                is unknown to the catalog.
        """
        self.metrics.increment("add_cat_called")
        user_id = await self._authorize(session)

        if not request.name or not request.name.strip():
            raise InvalidRequestError("cat name must not be blank")
        if not request.breed or not request.breed.strip():
            raise InvalidRequestError("breed must not be blank")

        breed = await self.executor.execute(
            lambda: self.breeds.find_by_breed_name(request.breed),
            label="breeds.find_by_breed_name",
        )
        if breed is None:
            raise InvalidRequestError(f"unknown breed {request.breed!r}")

        cat_id = self.id_generator.new_id()
        product = Product(id=cat_id, breed_id=breed.breed_id)
        record = self.conversions.convert(
            request, CatRecord, cat_id=cat_id, added_by=user_id
        )

        await self.executor.execute(
            lambda: self.billing.add_product(product), label="billing.add_product"
        )
        await self.executor.execute(
            lambda: self.store.cats.write(record), label="store.cats.write"
        )
        logger.info(
            "Cat %s (%s, %s) added by user %s", cat_id, request.name, breed.breed_name, user_id
        )
        return cat_id

    async def buy_cat(self, session: str, cat_id: UUID) -> Bill:
        """Sell a cat at its current price and return the ledger's bill.

        A cat known to the ledger but never persisted is still sold, at the
        price given by its breed's history.

        Raises:
            AuthorizationError: If the session is rejected.
            InvalidRequestError: If the cat resolves neither in the store nor
                in the ledger, or its ledger product has gone.
        """
        self.metrics.increment("buy_cat_called")
        user_id = await self._authorize(session)

        record = await self._get_record(cat_id)
        if record is None:
            product = await self.executor.execute(
                lambda: self.billing.get_product(cat_id), label="billing.get_product"
            )
            if product is None:
                raise InvalidRequestError("no such cat", cat_id)
            history = await self.executor.execute(
                lambda: self.exchange.get_price_history(product.breed_id),
                label="exchange.get_price_history",
            )
            price = current_price(history)
            logger.debug("Cat %s is only known to the ledger; selling at %s", cat_id, price)
        else:
            cat = self.conversions.convert(record, Cat)
            if not await self.aggregator.fetch_cat_data(cat):
                raise InvalidRequestError("cat is no longer for sale", cat_id)
            price = cat.price

        bill = await self.executor.execute(
            lambda: self.billing.sell_product(cat_id, price), label="billing.sell_product"
        )
        logger.info("Cat %s sold to user %s for %s (bill %s)", cat_id, user_id, price, bill.id)
        return bill

    # ------------------------------------------------------------- favourites

    async def add_cat_to_favourites(self, session: str, cat_id: UUID) -> None:
        """Add ``cat_id`` to the caller's favourites.

        Raises:
            AuthorizationError: If the session is rejected.
            InvalidRequestError: If the cat does not resolve.
        """
        self.metrics.increment("add_cat_to_favourites_called")
        user_id = await self._authorize(session)
        await self.favorites.add(user_id, cat_id)

    async def get_favourite_cats(self, session: str) -> list[Cat]:
        """List the caller's favourite cats, pruning the ones that are gone."""
        self.metrics.increment("get_favourite_cats_called")
        user_id = await self._authorize(session)
        return await self.favorites.list(user_id)

    async def delete_cat_from_favourites(self, session: str, cat_id: UUID) -> None:
        """Remove ``cat_id`` from the caller's favourites, if present."""
        self.metrics.increment("delete_cat_from_favourites_called")
        user_id = await self._authorize(session)
        await self.favorites.remove(user_id, cat_id)

    # ---------------------------------------------------------- observability

    async def collect_inventory(self) -> str:
        """Record ledger and store sizes on the metrics sink.

        Returns:
            str: The sink's summary after recording.
        """
        products = await self.executor.execute(
            lambda: self.billing.get_products(0, sys.maxsize), label="billing.get_products"
        )
        cats = await self.executor.execute(self.store.cats.count, label="store.cats.count")
        favorites = await self.executor.execute(
            self.store.favorites.count, label="store.favorites.count"
        )

        self.metrics.set("billing_products_count", len(products))
        self.metrics.set("cats_count", cats)
        self.metrics.set("favorites_count", favorites)
        return self.metrics.summary()

    # --------------------------------------------------------------- helpers

    async def _authorize(self, session: str) -> UUID:
        result = await self.executor.execute(
            lambda: self.authorization.authorize(session), label="authorization.authorize"
        )
        if not result.success or result.user_id is None:
            logger.debug("Session rejected")
            raise AuthorizationError()
        return result.user_id

    async def _get_record(self, cat_id: UUID) -> CatRecord | None:
        return await self.executor.execute(
            lambda: self.store.cats.get(cat_id), label="store.cats.get"
        )
