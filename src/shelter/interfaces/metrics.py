"""Interface for the observability sink.

The sink is injected wherever counts are recorded; there is no process-wide
registry. Nothing in the application reads metrics back to make decisions.
"""

import abc
from collections.abc import Mapping


class MetricsSink(abc.ABC):
    """Contract for a named-counter metrics sink."""

    @abc.abstractmethod
    def increment(self, key: str, amount: int = 1) -> None:
        """Add ``amount`` to the counter ``key`` (created at zero if missing)."""

    @abc.abstractmethod
    def set(self, key: str, value: int) -> None:
        """Overwrite the value of ``key`` (used for gauges such as counts)."""

    @abc.abstractmethod
    def get(self, key: str) -> int:
        """Return the current value of ``key``; zero if it was never recorded."""

    @abc.abstractmethod
    def snapshot(self) -> Mapping[str, int]:
        """Return a read-only copy of every recorded metric."""

    def summary(self) -> str:
        """Render all metrics as ``'key': 'value'`` lines, in recording order."""
        return "".join(
            f"'{key}': '{value}'\n" for key, value in self.snapshot().items()
        )
