"""Word list routes.

Endpoints:
- GET /collections: List committed word lists (optional search query)
- GET /collections/groups: Word lists grouped by recency or month
- GET /collections/containing/{headword}: Which word list holds a word
- GET /collections/{id}: Get one word list
- PATCH /collections/{id}: Rename a word list
- DELETE /collections/{id}: Delete a word list
- POST /collections/delete: Delete several word lists
- POST /collections/{id}/words: Validate a word and add it to a word list
- PATCH /collections/{id}/words/{entry_id}: Edit an entry's annotation
- DELETE /collections/{id}/words/{entry_id}: Remove an entry (the last one deletes the list)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from wordcapture.api.dependencies import get_collection_editor, get_collection_store
from wordcapture.api.models import (
    AddWordRequest,
    AnnotationRequest,
    CollectionGroupResponse,
    CollectionResponse,
    ContainingResponse,
    DeleteCollectionsRequest,
    EntryResponse,
    GroupBy,
    RenameRequest,
)
from wordcapture.domain.model.entry import normalize_headword
from wordcapture.domain.model.errors import (
    DuplicateWordError,
    InvalidWordError,
    NotFoundError,
    PersistenceError,
)
from wordcapture.services import history_service
from wordcapture.services.collection_editor import CollectionEditor
from wordcapture.services.collection_store import CollectionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("", response_model=list[CollectionResponse])
async def list_collections(
    q: str | None = None,
    store: CollectionStore = Depends(get_collection_store),
):
    """List word lists, newest first."""
    collections = store.collections
    if q:
        collections = history_service.search(collections, q)
    return [CollectionResponse.from_domain(c) for c in collections]


@router.get("/groups", response_model=list[CollectionGroupResponse])
async def group_collections(
    by: GroupBy = "recency",
    q: str | None = None,
    store: CollectionStore = Depends(get_collection_store),
):
    """Group word lists for the history view."""
    collections = store.collections
    if q:
        collections = history_service.search(collections, q)

    if by == "month":
        groups = history_service.group_by_month(collections)
    else:
        groups = [(bucket.value, items) for bucket, items in history_service.group_by_recency(collections)]

    return [
        CollectionGroupResponse(
            label=label,
            collections=[CollectionResponse.from_domain(c) for c in items],
        )
        for label, items in groups
    ]


@router.get("/containing/{headword}", response_model=ContainingResponse)
async def find_containing(
    headword: str,
    store: CollectionStore = Depends(get_collection_store),
):
    """Find the word list that already contains a headword."""
    return ContainingResponse(
        headword=normalize_headword(headword),
        title=store.find_collection_containing(headword),
    )


@router.get("/{collection_id}", response_model=CollectionResponse)
async def get_collection(
    collection_id: str,
    store: CollectionStore = Depends(get_collection_store),
):
    collection = store.get(collection_id)
    if not collection:
        raise HTTPException(status_code=404, detail="Word list not found")
    return CollectionResponse.from_domain(collection)


@router.patch("/{collection_id}", response_model=CollectionResponse)
async def rename_collection(
    collection_id: str,
    request: RenameRequest,
    store: CollectionStore = Depends(get_collection_store),
):
    collection = store.get(collection_id)
    if not collection:
        raise HTTPException(status_code=404, detail="Word list not found")

    try:
        saved = store.save(collection.with_title(request.title))
    except PersistenceError as e:
        logger.error("Failed to rename word list", extra={"collection_id": collection_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")

    return CollectionResponse.from_domain(saved)


@router.delete("/{collection_id}")
async def delete_collection(
    collection_id: str,
    store: CollectionStore = Depends(get_collection_store),
):
    collection = store.get(collection_id)
    if not collection:
        raise HTTPException(status_code=404, detail="Word list not found")

    try:
        store.delete(collection)
    except PersistenceError as e:
        logger.error("Failed to delete word list", extra={"collection_id": collection_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")

    return {"success": True, "id": collection_id}


@router.post("/delete")
async def delete_collections(
    request: DeleteCollectionsRequest,
    store: CollectionStore = Depends(get_collection_store),
):
    try:
        deleted = store.delete_many(request.ids)
    except PersistenceError as e:
        logger.error("Failed to delete word lists", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")

    return {"success": True, "deleted": deleted}


@router.post("/{collection_id}/words", response_model=EntryResponse)
async def add_word(
    collection_id: str,
    request: AddWordRequest,
    editor: CollectionEditor = Depends(get_collection_editor),
):
    """Validate a word against the dictionary and append it to a word list."""
    try:
        entry = await editor.add_word(collection_id, request.word)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Word list not found")
    except DuplicateWordError as e:
        raise HTTPException(
            status_code=409,
            detail={"message": "Word already exists", "headword": e.headword, "title": e.title},
        )
    except InvalidWordError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid word", "headword": e.headword, "reason": e.reason},
        )
    except PersistenceError as e:
        logger.error("Failed to save word list", extra={"collection_id": collection_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")

    return EntryResponse.from_domain(entry)


@router.patch("/{collection_id}/words/{entry_id}", response_model=EntryResponse)
async def edit_annotation(
    collection_id: str,
    entry_id: str,
    request: AnnotationRequest,
    editor: CollectionEditor = Depends(get_collection_editor),
):
    try:
        entry = editor.edit_annotation(collection_id, entry_id, request.annotation)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        logger.error("Failed to save word list", extra={"collection_id": collection_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return EntryResponse.from_domain(entry)


@router.delete("/{collection_id}/words/{entry_id}")
async def remove_entry(
    collection_id: str,
    entry_id: str,
    editor: CollectionEditor = Depends(get_collection_editor),
):
    """Remove a word. Removing the last word deletes the word list."""
    try:
        saved = editor.remove_entry(collection_id, entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError as e:
        logger.error("Failed to save word list", extra={"collection_id": collection_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return {"success": True, "id": entry_id, "collection_deleted": saved is None}
