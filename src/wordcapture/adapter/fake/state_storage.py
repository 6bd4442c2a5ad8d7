"""In-memory implementation of StateStoragePort for testing."""

from wordcapture.domain.model.errors import PersistenceError


class FakeStateStorage:
    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})
        self.writes: list[str] = []
        self.fail_writes = False
        self.failing_reads = 0

    def read(self, key: str) -> str | None:
        if self.failing_reads > 0:
            self.failing_reads -= 1
            raise PersistenceError(f"read of {key} failed")
        return self.data.get(key)

    def write(self, key: str, payload: str) -> None:
        if self.fail_writes:
            raise PersistenceError(f"write to {key} failed")
        self.writes.append(key)
        self.data[key] = payload

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise PersistenceError(f"remove of {key} failed")
        self.data.pop(key, None)

    def ping(self) -> bool:
        return True
