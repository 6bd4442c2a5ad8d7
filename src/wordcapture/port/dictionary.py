"""Outbound interface for word validation."""

from typing import Protocol

from wordcapture.domain.model.entry import LookupResult


class DictionaryPort(Protocol):
    """Port for validating a single word against a dictionary source.

    lookup() never raises for lookup failures (network, status, empty or
    malformed payload); those come back as ``LookupResult(valid=False)``.
    """

    async def lookup(self, word: str) -> LookupResult: ...
