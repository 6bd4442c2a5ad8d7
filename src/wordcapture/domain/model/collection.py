"""Word list (collection) domain model.

A Collection is a titled, ordered set of validated entries. The same shape
is used for the single in-progress draft and for committed word lists.
Collections are immutable values; the ``with_*`` methods return copies.
"""

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from wordcapture.domain.model.entry import Entry, normalize_headword, optional_str, parse_timestamp
from wordcapture.domain.model.errors import DuplicateWordError, NotFoundError


def default_title(created_at: datetime) -> str:
    """Date-derived label, e.g. '9月1日 单词表', in local time."""
    local = created_at.astimezone()
    return f"{local.month}月{local.day}日 单词表"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Collection:
    """A named word list."""
    id: str
    title: str = ""
    entries: tuple[Entry, ...] = ()
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self):
        object.__setattr__(self, 'entries', tuple(self.entries))
        if not self.title.strip():
            object.__setattr__(self, 'title', default_title(self.created_at))
        seen: set[str] = set()
        for entry in self.entries:
            if entry.headword in seen:
                raise DuplicateWordError(entry.headword, self.title)
            seen.add(entry.headword)

    @staticmethod
    def new(title: str = "", entries: tuple[Entry, ...] | list[Entry] = ()) -> 'Collection':
        """Factory method for a fresh word list (or draft)."""
        now = _now()
        return Collection(
            id=str(uuid.uuid4()),
            title=title,
            entries=tuple(entries),
            created_at=now,
            updated_at=now,
        )

    # ── queries ───────────────────────────────────────────────

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def formatted_date(self) -> str:
        local = self.created_at.astimezone()
        return f"{local.year}年{local.month}月{local.day}日"

    def contains(self, headword: str) -> bool:
        return any(entry.matches(headword) for entry in self.entries)

    def find_entry(self, entry_id: str) -> Entry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    # ── value-style updates ───────────────────────────────────

    def with_entry(self, entry: Entry) -> 'Collection':
        if self.contains(entry.headword):
            raise DuplicateWordError(entry.headword, self.title)
        return dataclasses.replace(self, entries=self.entries + (entry,))

    def without_entry(self, entry_id: str) -> 'Collection':
        if self.find_entry(entry_id) is None:
            raise NotFoundError(f"Entry {entry_id} not found")
        return dataclasses.replace(
            self, entries=tuple(e for e in self.entries if e.id != entry_id),
        )

    def with_annotation(self, entry_id: str, annotation: str) -> 'Collection':
        if self.find_entry(entry_id) is None:
            raise NotFoundError(f"Entry {entry_id} not found")
        return dataclasses.replace(self, entries=tuple(
            dataclasses.replace(e, annotation=annotation) if e.id == entry_id else e
            for e in self.entries
        ))

    def with_title(self, title: str) -> 'Collection':
        return dataclasses.replace(self, title=title)

    def touched(self, now: datetime | None = None) -> 'Collection':
        return dataclasses.replace(self, updated_at=now or _now())

    # ── codec ─────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'entries': [entry.to_dict() for entry in self.entries],
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Collection':
        """Decode a persisted collection. Raises on missing or malformed fields."""
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        return cls(
            id=str(data['id']),
            title=optional_str(data, 'title'),
            entries=tuple(Entry.from_dict(item) for item in data['entries']),
            created_at=parse_timestamp(data['created_at']),
            updated_at=parse_timestamp(data['updated_at']),
        )
