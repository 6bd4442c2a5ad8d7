"""Word entry domain models."""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from wordcapture.domain.model.errors import InvalidWordError

# Headword grammar: a letter followed by letters, apostrophes or hyphens.
HEADWORD_PATTERN = re.compile(r"[A-Za-z][A-Za-z'-]*")


def normalize_headword(text: str) -> str:
    """Case-fold a headword for identity and duplicate checks."""
    return text.strip().lower()


def is_valid_headword(text: str) -> bool:
    """Check that the whole text matches the headword grammar."""
    return bool(text) and HEADWORD_PATTERN.fullmatch(text) is not None


def optional_str(data: dict, key: str) -> str:
    """Read an optional text field from a persisted record; null means blank."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO timestamp string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Candidate:
    """Extracted, not-yet-validated (headword, annotation) pair."""
    headword: str
    annotation: str = ""


@dataclass(frozen=True)
class LookupResult:
    """Normalized outcome of a dictionary lookup.

    Optional fields default to an empty string rather than None so callers
    never need to distinguish "missing" from "blank".
    """
    word: str
    phonetic: str = ""
    definition: str = ""
    audio_url: str = ""
    valid: bool = False

    @classmethod
    def invalid(cls, word: str) -> 'LookupResult':
        return cls(word=word)


@dataclass(frozen=True)
class Entry:
    """A single validated word inside a word list."""
    id: str
    headword: str
    definition: str = ""
    annotation: str = ""
    phonetic: str = ""
    audio_url: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not is_valid_headword(self.headword) or self.headword != self.headword.lower():
            raise InvalidWordError(self.headword, "headword must be a lowercase word")

    @staticmethod
    def create(
        headword: str,
        definition: str = "",
        annotation: str = "",
        phonetic: str = "",
        audio_url: str = "",
    ) -> 'Entry':
        """Factory method: normalizes the headword and assigns id and timestamp."""
        return Entry(
            id=str(uuid.uuid4()),
            headword=normalize_headword(headword),
            definition=definition,
            annotation=annotation,
            phonetic=phonetic,
            audio_url=audio_url,
            created_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def from_lookup(result: LookupResult, annotation: str = "") -> 'Entry':
        return Entry.create(
            headword=result.word,
            definition=result.definition,
            annotation=annotation,
            phonetic=result.phonetic,
            audio_url=result.audio_url,
        )

    def matches(self, headword: str) -> bool:
        return self.headword == normalize_headword(headword)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'headword': self.headword,
            'definition': self.definition,
            'annotation': self.annotation,
            'phonetic': self.phonetic,
            'audio_url': self.audio_url,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Entry':
        """Decode a persisted entry. Raises on missing or malformed fields."""
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        return cls(
            id=str(data['id']),
            headword=data['headword'],
            definition=optional_str(data, 'definition'),
            annotation=optional_str(data, 'annotation'),
            phonetic=optional_str(data, 'phonetic'),
            audio_url=optional_str(data, 'audio_url'),
            created_at=parse_timestamp(data['created_at']),
        )
