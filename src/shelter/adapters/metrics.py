"""In-memory metrics sink."""

from collections.abc import Mapping
from types import MappingProxyType

from shelter.interfaces.metrics import MetricsSink


class InMemoryMetrics(MetricsSink):
    """Named counters kept in a plain dict.

    Counters are created at zero on first use and keep their first-recorded
    position, so `summary()` lists them in the order they appeared.
    """

    def __init__(self) -> None:
        self._values: dict[str, int] = {}

    def increment(self, key: str, amount: int = 1) -> None:
        self._values[key] = self._values.get(key, 0) + amount

    def set(self, key: str, value: int) -> None:
        self._values[key] = value

    def get(self, key: str) -> int:
        return self._values.get(key, 0)

    def snapshot(self) -> Mapping[str, int]:
        return MappingProxyType(dict(self._values))

    def clear(self) -> None:
        """Forget every recorded metric."""
        self._values.clear()
