"""Draft lifecycle for the single in-progress capture session.

States:
    EMPTY       no draft, or a draft without entries
    CAPTURING   at least one entry; words can be added, edited, removed
    COMMITTING  finalize() in progress, returns to EMPTY
    DISCARDING  discard() in progress, returns to EMPTY

Every mutation is autosaved through the CollectionStore so a pending draft
survives a restart.
"""

import logging
from enum import Enum

from wordcapture.domain.model.collection import Collection
from wordcapture.domain.model.entry import Entry, normalize_headword
from wordcapture.domain.model.errors import DuplicateWordError
from wordcapture.port.dictionary import DictionaryPort
from wordcapture.services.collection_store import CollectionStore
from wordcapture.services.validation_service import validate_word

logger = logging.getLogger(__name__)


class DraftState(str, Enum):
    EMPTY = 'empty'
    CAPTURING = 'capturing'
    COMMITTING = 'committing'
    DISCARDING = 'discarding'


class DraftController:
    """Coordinates adds, edits and finalize/discard of the store's draft."""

    def __init__(self, store: CollectionStore, dictionary: DictionaryPort):
        self.store = store
        self.dictionary = dictionary
        self._transition: DraftState | None = None

    @property
    def state(self) -> DraftState:
        if self._transition is not None:
            return self._transition
        draft = self.store.draft
        if draft is None or draft.is_empty:
            return DraftState.EMPTY
        return DraftState.CAPTURING

    @property
    def draft(self) -> Collection:
        """Current draft; an unsaved empty one if none exists yet."""
        return self.store.draft or Collection.new()

    # ── adding words ──────────────────────────────────────────

    def check_duplicate(self, headword: str) -> None:
        """Raise DuplicateWordError if headword is in the draft or any word list."""
        key = normalize_headword(headword)
        draft = self.store.draft
        if draft is not None and draft.contains(key):
            raise DuplicateWordError(key, draft.title)
        existing_title = self.store.find_collection_containing(key)
        if existing_title is not None:
            raise DuplicateWordError(key, existing_title)

    async def add_word(self, text: str) -> Entry:
        """Validate a typed word and append it to the draft.

        Raises:
            DuplicateWordError: Already in the draft or a committed word list.
            InvalidWordError: Fails the word grammar or the dictionary lookup.
        """
        headword = normalize_headword(text)
        self.check_duplicate(headword)
        entry = await validate_word(self.dictionary, headword)
        return self.add_validated_entry(entry)

    def add_validated_entry(self, entry: Entry) -> Entry:
        """Append an already validated entry, re-checking duplicates."""
        self.check_duplicate(entry.headword)
        self.store.save_draft(self.draft.with_entry(entry))
        logger.info("Word added to draft", extra={"word": entry.headword, "entry_id": entry.id})
        return entry

    # ── editing ───────────────────────────────────────────────

    def edit_annotation(self, entry_id: str, annotation: str) -> Entry:
        updated = self.draft.with_annotation(entry_id, annotation)
        self.store.save_draft(updated)
        return updated.find_entry(entry_id)

    def remove_entry(self, entry_id: str) -> None:
        self.store.save_draft(self.draft.without_entry(entry_id))
        logger.info("Word removed from draft", extra={"entry_id": entry_id})

    def rename(self, title: str) -> Collection:
        return self.store.save_draft(self.draft.with_title(title))

    # ── finishing ─────────────────────────────────────────────

    def finalize(self) -> Collection | None:
        """Commit the draft as a word list. Returns None for an empty draft."""
        self._transition = DraftState.COMMITTING
        try:
            committed = self.store.finalize_draft()
        finally:
            self._transition = None
        if committed is not None:
            logger.info("Draft finalized", extra={
                "collection_id": committed.id,
                "entry_count": len(committed.entries),
            })
        return committed

    def discard(self) -> None:
        self._transition = DraftState.DISCARDING
        try:
            self.store.clear_draft()
        finally:
            self._transition = None
        logger.info("Draft discarded")
