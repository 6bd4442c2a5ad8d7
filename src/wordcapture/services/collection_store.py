"""Durable owner of the committed word lists and the draft.

State lives under two independent storage keys, each written wholesale:

    word_lists     JSON list of every committed Collection
    current_draft  JSON object of the in-progress draft (absent if none)

Every operation runs under one re-entrant lock for its whole
read-modify-persist sequence. New state is encoded and written first and
only then swapped into memory, so a failed write changes nothing.

Stored state that cannot be decoded is treated as empty. State that could
not be read at all (backend down, I/O error) is not: writes to that key are
refused until a reload succeeds, so an outage never overwrites saved lists.
"""

import json
import logging
import threading
from collections.abc import Iterable
from datetime import datetime, timezone

from wordcapture.domain.model.collection import Collection
from wordcapture.domain.model.entry import normalize_headword
from wordcapture.domain.model.errors import DomainError, PersistenceError
from wordcapture.port.state_storage import StateStoragePort

logger = logging.getLogger(__name__)

WORD_LISTS_KEY = 'word_lists'
CURRENT_DRAFT_KEY = 'current_draft'

_DECODE_ERRORS = (DomainError, KeyError, TypeError, ValueError)


def _sorted_newest_first(collections: Iterable[Collection]) -> list[Collection]:
    return sorted(collections, key=lambda c: c.created_at, reverse=True)


class CollectionStore:
    """Owns the committed Collection set and the single Draft."""

    def __init__(self, storage: StateStoragePort):
        self.storage = storage
        self._lock = threading.RLock()
        self._collections: list[Collection] = []
        self._draft: Collection | None = None
        self._collections_loaded = False
        self._draft_loaded = False
        self.load_all()
        self.load_draft()

    # ── committed collections ─────────────────────────────────

    @property
    def collections(self) -> list[Collection]:
        """Snapshot of committed collections in store order."""
        with self._lock:
            return list(self._collections)

    def ensure_loaded(self) -> bool:
        """Retry any key that failed to read. True once both are loaded."""
        with self._lock:
            if not self._collections_loaded:
                self.load_all()
            if not self._draft_loaded:
                self.load_draft()
            return self._collections_loaded and self._draft_loaded

    def load_all(self) -> list[Collection]:
        """Reload committed collections from storage, newest first.

        Undecodable state is treated as an empty store; it is never
        partially trusted. A failed read leaves the store unloaded.
        """
        with self._lock:
            try:
                payload = self.storage.read(WORD_LISTS_KEY)
            except PersistenceError as e:
                logger.error("Failed to read word lists, writes blocked until reload", extra={"error": str(e)})
                self._collections = []
                self._collections_loaded = False
                return []

            self._collections_loaded = True
            try:
                if payload is None:
                    self._collections = []
                else:
                    raw = json.loads(payload)
                    if not isinstance(raw, list):
                        raise TypeError(f"expected a list, got {type(raw).__name__}")
                    self._collections = _sorted_newest_first(
                        Collection.from_dict(item) for item in raw
                    )
            except _DECODE_ERRORS as e:
                logger.error("Failed to decode word lists, starting empty", extra={"error": str(e)})
                self._collections = []
            return list(self._collections)

    def get(self, collection_id: str) -> Collection | None:
        with self._lock:
            for collection in self._collections:
                if collection.id == collection_id:
                    return collection
            return None

    def save(self, collection: Collection) -> Collection | None:
        """Insert or replace a collection.

        An empty collection is deleted instead. A replaced collection keeps
        its position and gets a fresh ``updated_at``; a new one goes first.

        Returns:
            The stored collection, or None when it was deleted as empty.

        Raises:
            PersistenceError: Encoding or writing failed; nothing changed.
        """
        if collection.is_empty:
            self.delete(collection)
            return None

        with self._lock:
            self._require_collections_loaded()
            updated = list(self._collections)
            for i, existing in enumerate(updated):
                if existing.id == collection.id:
                    stored = collection.touched(datetime.now(timezone.utc))
                    updated[i] = stored
                    break
            else:
                stored = collection
                updated.insert(0, stored)

            self._persist_collections(updated)
            logger.info("Word list saved", extra={
                "collection_id": stored.id,
                "title": stored.title,
                "entry_count": len(stored.entries),
            })
            return stored

    def delete(self, collection: Collection) -> None:
        self.delete_many([collection.id])

    def delete_many(self, ids: Iterable[str]) -> int:
        """Remove collections by id. Returns the number removed."""
        doomed = set(ids)
        with self._lock:
            self._require_collections_loaded()
            remaining = [c for c in self._collections if c.id not in doomed]
            removed = len(self._collections) - len(remaining)
            if removed:
                self._persist_collections(remaining)
                logger.info("Word lists deleted", extra={"count": removed})
            return removed

    def find_collection_containing(self, headword: str) -> str | None:
        """Title of the first committed collection containing headword (case-insensitive)."""
        key = normalize_headword(headword)
        with self._lock:
            for collection in self._collections:
                if collection.contains(key):
                    return collection.title
            return None

    def _require_collections_loaded(self) -> None:
        if not self._collections_loaded:
            self.load_all()
        if not self._collections_loaded:
            raise PersistenceError("Word lists could not be read; refusing to overwrite them")

    def _persist_collections(self, collections: list[Collection]) -> None:
        payload = self._encode([c.to_dict() for c in collections])
        self.storage.write(WORD_LISTS_KEY, payload)
        self._collections = collections

    # ── draft ─────────────────────────────────────────────────

    @property
    def draft(self) -> Collection | None:
        with self._lock:
            return self._draft

    def load_draft(self) -> Collection | None:
        with self._lock:
            try:
                payload = self.storage.read(CURRENT_DRAFT_KEY)
            except PersistenceError as e:
                logger.error("Failed to read draft, writes blocked until reload", extra={"error": str(e)})
                self._draft = None
                self._draft_loaded = False
                return None

            self._draft_loaded = True
            try:
                self._draft = None if payload is None else Collection.from_dict(json.loads(payload))
            except _DECODE_ERRORS as e:
                logger.error("Failed to decode draft, starting without one", extra={"error": str(e)})
                self._draft = None
            return self._draft

    def save_draft(self, draft: Collection) -> Collection:
        """Overwrite the persisted draft.

        Raises:
            PersistenceError: The write failed, or the stored draft was not
                readable when ``draft`` was built from the in-memory copy.
                In the latter case the store reloads and the caller retries.
        """
        with self._lock:
            if not self._draft_loaded:
                self.load_draft()
                raise PersistenceError("Draft was not loaded from storage; retry the change")
            self.storage.write(CURRENT_DRAFT_KEY, self._encode(draft.to_dict()))
            self._draft = draft
            return draft

    def clear_draft(self) -> None:
        with self._lock:
            self.storage.remove(CURRENT_DRAFT_KEY)
            self._draft = None
            self._draft_loaded = True

    def finalize_draft(self) -> Collection | None:
        """Commit the draft as a word list and clear it.

        An absent or empty draft is cleared and nothing is committed.
        """
        with self._lock:
            if not self._draft_loaded:
                self.load_draft()
            if not self._draft_loaded:
                raise PersistenceError("Draft could not be read; nothing committed")

            draft = self._draft
            if draft is None or draft.is_empty:
                if draft is not None:
                    self.clear_draft()
                return None

            committed = self.save(draft)
            self.clear_draft()
            return committed

    # ── helpers ───────────────────────────────────────────────

    def ping(self) -> bool:
        return self.storage.ping()

    @staticmethod
    def _encode(value) -> str:
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to encode state: {e}") from e
