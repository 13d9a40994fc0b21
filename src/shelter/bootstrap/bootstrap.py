"""Wire the shelter facade with its collaborators, store and retry policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shelter import config
from shelter.adapters.db.engine import make_engine
from shelter.adapters.id_generators import UUIDv4Generator
from shelter.adapters.metrics import InMemoryMetrics
from shelter.adapters.store import SqlAlchemyShelterStore
from shelter.service_layer.executor import ResilientExecutor
from shelter.service_layer.facade import ShelterService

if TYPE_CHECKING:
    from shelter.interfaces.authorization import AuthorizationService
    from shelter.interfaces.billing import BillingService
    from shelter.interfaces.breed_catalog import BreedCatalog
    from shelter.interfaces.id_generator import IdGenerator
    from shelter.interfaces.metrics import MetricsSink
    from shelter.interfaces.price_exchange import PriceExchange
    from shelter.interfaces.store import ShelterStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    service: ShelterService
    metrics: MetricsSink
    store: ShelterStore


def build_store(url: str) -> SqlAlchemyShelterStore:
    """Build the SQLAlchemy-backed store for ``url``."""
    return SqlAlchemyShelterStore(make_engine(url))


def bootstrap(  # pylint: disable=too-many-arguments
    *,
    authorization: AuthorizationService,
    billing: BillingService,
    breeds: BreedCatalog,
    exchange: PriceExchange,
    store: ShelterStore | None = None,
    retry_policy: config.RetryPolicy | None = None,
    id_generator: IdGenerator | None = None,
    metrics: MetricsSink | None = None,
) -> AppContainer:
    """Assemble a ready-to-use `ShelterService`.

    Args:
        authorization: Session authorization collaborator.
        billing: Ledger collaborator.
        breeds: Breed catalog collaborator.
        exchange: Price exchange collaborator.
        store: Persisted store; built from ``SHELTER_DB_URL`` if omitted.
        retry_policy: Retry policy; read from the environment if omitted.
        id_generator: Identifier source for new cats; random UUIDs if omitted.
        metrics: Metrics sink; a fresh `InMemoryMetrics` if omitted.

    Raises:
        DatabaseUrlNotSetError: If no store is given and ``SHELTER_DB_URL``
            is unset.
        ConfigurationError: If the retry settings are invalid.
    """
    store = store if store is not None else build_store(config.get_db_url())
    retry_policy = retry_policy or config.get_retry_policy()
    metrics = metrics if metrics is not None else InMemoryMetrics()

    executor = ResilientExecutor(
        metrics, max_attempts=retry_policy.max_attempts, delay=retry_policy.delay
    )
    service = ShelterService(
        executor=executor,
        authorization=authorization,
        billing=billing,
        breeds=breeds,
        exchange=exchange,
        store=store,
        id_generator=id_generator or UUIDv4Generator(),
        metrics=metrics,
    )
    logger.debug(
        "Shelter service wired (store=%s, max_attempts=%s, delay=%ss)",
        type(store).__name__,
        retry_policy.max_attempts,
        retry_policy.delay,
    )
    return AppContainer(service=service, metrics=metrics, store=store)
