"""ID generators for SHELTER."""

import threading
import uuid

from shelter.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class UUIDv4Generator(IdGenerator):
    """UUIDv4 generator.

    UUIDv4 are universally unique identifiers that are randomly generated.
    They are not guaranteed to be sequential or ordered in any way.
    This generator uses Python's built-in `uuid` library to create UUIDv4 identifiers.
    """

    def new_id(self) -> uuid.UUID:
        """Generate a new UUID."""
        return uuid.uuid4()


class SequentialIdGenerator(IdGenerator):
    """Deterministic generator producing UUIDs from an increasing counter.

    The counter's 4-byte little-endian encoding fills the start of the UUID and
    the remaining bytes are zero, so ``1`` becomes
    ``00000001-0000-0000-0000-000000000000``.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, start: int = 1) -> None:
        self._lock = threading.Lock()
        self._next = start

    def new_id(self) -> uuid.UUID:
        """Generate the next identifier (serialized across threads)."""
        with self._lock:
            value = self._next
            self._next += 1
        return int_to_uuid(value)


def int_to_uuid(value: int) -> uuid.UUID:
    """Build a UUID carrying ``value`` in its first four bytes (little-endian).

    Args:
        value: A non-negative integer below ``2**32``.

    Returns:
        uuid.UUID: The identifier with the same logical value as ``value``.
    """
    return uuid.UUID(bytes_le=value.to_bytes(4, "little") + bytes(12))
