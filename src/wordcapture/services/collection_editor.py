"""Edit committed word lists: add, annotate and remove words.

Every change goes through CollectionStore.save(), so removing the last word
of a list deletes the list.
"""

import logging

from wordcapture.domain.model.collection import Collection
from wordcapture.domain.model.entry import Entry, normalize_headword
from wordcapture.domain.model.errors import DuplicateWordError, NotFoundError
from wordcapture.port.dictionary import DictionaryPort
from wordcapture.services.collection_store import CollectionStore
from wordcapture.services.validation_service import validate_word

logger = logging.getLogger(__name__)


class CollectionEditor:
    """Applies word-level edits to one committed collection at a time."""

    def __init__(self, store: CollectionStore, dictionary: DictionaryPort):
        self.store = store
        self.dictionary = dictionary

    def get(self, collection_id: str) -> Collection:
        collection = self.store.get(collection_id)
        if collection is None:
            raise NotFoundError(f"Word list {collection_id} not found")
        return collection

    def check_duplicate(self, collection: Collection, headword: str) -> None:
        """Raise DuplicateWordError if headword is in this list or another one.

        The draft is not consulted; it is checked when it takes its own words.
        """
        key = normalize_headword(headword)
        if collection.contains(key):
            raise DuplicateWordError(key, collection.title)
        for other in self.store.collections:
            if other.id != collection.id and other.contains(key):
                raise DuplicateWordError(key, other.title)

    async def add_word(self, collection_id: str, text: str) -> Entry:
        """Validate a typed word and append it to a committed word list.

        Raises:
            NotFoundError: No word list with that id.
            DuplicateWordError: Already in this or another word list.
            InvalidWordError: Fails the word grammar or the dictionary lookup.
        """
        headword = normalize_headword(text)
        self.check_duplicate(self.get(collection_id), headword)
        entry = await validate_word(self.dictionary, headword)

        # the list may have changed while the lookup was in flight
        collection = self.get(collection_id)
        self.check_duplicate(collection, entry.headword)
        self.store.save(collection.with_entry(entry))
        logger.info("Word added to word list", extra={
            "collection_id": collection_id,
            "word": entry.headword,
        })
        return entry

    def edit_annotation(self, collection_id: str, entry_id: str, annotation: str) -> Entry:
        updated = self.get(collection_id).with_annotation(entry_id, annotation)
        self.store.save(updated)
        return updated.find_entry(entry_id)

    def remove_entry(self, collection_id: str, entry_id: str) -> Collection | None:
        """Remove a word. Returns the updated list, or None if it is now deleted."""
        saved = self.store.save(self.get(collection_id).without_entry(entry_id))
        logger.info("Word removed from word list", extra={
            "collection_id": collection_id,
            "entry_id": entry_id,
            "list_deleted": saved is None,
        })
        return saved
