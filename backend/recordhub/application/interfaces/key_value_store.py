"""Abstract key-value persistence port.

Models the browser's local storage: string keys mapped to string values,
read and written synchronously.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port for small durable string values — implemented in the infrastructure layer."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``. Raises StorageError on failure."""
        ...
