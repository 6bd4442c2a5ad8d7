"""In-memory implementation of DictionaryPort for testing."""

from wordcapture.domain.model.entry import LookupResult, normalize_headword


class FakeDictionaryAdapter:
    """Fake dictionary adapter that returns preconfigured responses.

    Words listed in ``known`` are valid (value is the definition); every
    other word comes back invalid. ``errors`` maps words to exceptions to
    raise, for exercising callers that must survive misbehaving ports.
    """

    def __init__(
        self,
        known: dict[str, str] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.known = {normalize_headword(k): v for k, v in (known or {}).items()}
        self.errors = errors or {}
        self.calls: list[str] = []

    async def lookup(self, word: str) -> LookupResult:
        normalized = normalize_headword(word)
        self.calls.append(normalized)
        if normalized in self.errors:
            raise self.errors[normalized]
        if normalized not in self.known:
            return LookupResult.invalid(normalized)
        return LookupResult(
            word=normalized,
            phonetic=f"{normalized}-ipa",
            definition=self.known[normalized],
            audio_url=f"https://audio.example/{normalized}.mp3",
            valid=True,
        )
