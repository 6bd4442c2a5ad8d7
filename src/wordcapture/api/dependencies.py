import os
from functools import lru_cache

from fastapi import Depends, HTTPException

from wordcapture.adapter.external.free_dictionary import FreeDictionaryAdapter
from wordcapture.adapter.file.state_storage import FileStateStorage
from wordcapture.adapter.kv.redis_state_storage import RedisStateStorage
from wordcapture.adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from wordcapture.adapter.mongodb.state_storage import MongoStateStorage
from wordcapture.port.dictionary import DictionaryPort
from wordcapture.port.state_storage import StateStoragePort
from wordcapture.services.collection_editor import CollectionEditor
from wordcapture.services.collection_store import CollectionStore
from wordcapture.services.draft_service import DraftController
from wordcapture.services.import_service import ImportService

STORAGE_BACKEND = os.getenv('WORDCAPTURE_STORAGE', 'file')
VALIDATION_CONCURRENCY = int(os.getenv('VALIDATION_CONCURRENCY', '1'))


def _build_storage() -> StateStoragePort:
    if STORAGE_BACKEND == 'redis':
        return RedisStateStorage()
    if STORAGE_BACKEND == 'mongodb':
        client = get_mongodb_client()
        if client is None:
            raise HTTPException(status_code=503, detail="Database unavailable")
        return MongoStateStorage(client[DATABASE_NAME])
    return FileStateStorage()


@lru_cache(maxsize=1)
def get_collection_store() -> CollectionStore:
    """Process-wide store; it mirrors persisted state in memory."""
    return CollectionStore(_build_storage())


def get_dictionary_port() -> DictionaryPort:
    return FreeDictionaryAdapter()


def get_collection_editor(
    store: CollectionStore = Depends(get_collection_store),
    dictionary: DictionaryPort = Depends(get_dictionary_port),
) -> CollectionEditor:
    return CollectionEditor(store, dictionary)


def get_draft_controller(
    store: CollectionStore = Depends(get_collection_store),
    dictionary: DictionaryPort = Depends(get_dictionary_port),
) -> DraftController:
    return DraftController(store, dictionary)


def get_import_service(
    store: CollectionStore = Depends(get_collection_store),
    dictionary: DictionaryPort = Depends(get_dictionary_port),
) -> ImportService:
    return ImportService(dictionary, store, max_concurrency=VALIDATION_CONCURRENCY)
