"""Port for keyed durable state."""

from typing import Protocol


class StateStoragePort(Protocol):
    """Protocol for storing independently keyed, wholesale-written values.

    Each write replaces the value of one key in a single operation, so a
    reader never observes a partially written value. Backend failures are
    raised as PersistenceError.
    """

    def read(self, key: str) -> str | None:
        """Return the stored payload, or None if the key is absent."""
        ...

    def write(self, key: str, payload: str) -> None:
        """Replace the payload stored under key."""
        ...

    def remove(self, key: str) -> None:
        """Delete the key. Missing keys are ignored."""
        ...

    def ping(self) -> bool:
        """Report whether the backend is reachable."""
        ...
