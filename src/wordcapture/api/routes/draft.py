"""Draft routes for the in-progress capture session.

Endpoints:
- GET /draft: Current draft and lifecycle state
- PATCH /draft: Rename the draft
- POST /draft/words: Validate a word and add it to the draft
- PATCH /draft/words/{entry_id}: Edit an entry's annotation
- DELETE /draft/words/{entry_id}: Remove an entry
- POST /draft/finalize: Commit the draft as a word list
- DELETE /draft: Discard the draft
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from wordcapture.api.dependencies import get_draft_controller
from wordcapture.api.models import (
    AddWordRequest,
    AnnotationRequest,
    CollectionResponse,
    DraftResponse,
    EntryResponse,
    RenameRequest,
)
from wordcapture.domain.model.errors import (
    DuplicateWordError,
    InvalidWordError,
    NotFoundError,
    PersistenceError,
)
from wordcapture.services.draft_service import DraftController

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/draft", tags=["draft"])


def _draft_response(controller: DraftController) -> DraftResponse:
    return DraftResponse(
        state=controller.state.value,
        draft=CollectionResponse.from_domain(controller.draft),
    )


@router.get("", response_model=DraftResponse)
async def get_draft(controller: DraftController = Depends(get_draft_controller)):
    return _draft_response(controller)


@router.patch("", response_model=DraftResponse)
async def rename_draft(
    request: RenameRequest,
    controller: DraftController = Depends(get_draft_controller),
):
    try:
        controller.rename(request.title)
    except PersistenceError as e:
        logger.error("Failed to rename draft", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return _draft_response(controller)


@router.post("/words", response_model=EntryResponse)
async def add_word(
    request: AddWordRequest,
    controller: DraftController = Depends(get_draft_controller),
):
    """Validate a word against the dictionary and append it to the draft."""
    try:
        entry = await controller.add_word(request.word)
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
        logger.error("Failed to save draft", extra={"word": request.word, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")

    return EntryResponse.from_domain(entry)


@router.patch("/words/{entry_id}", response_model=EntryResponse)
async def edit_annotation(
    entry_id: str,
    request: AnnotationRequest,
    controller: DraftController = Depends(get_draft_controller),
):
    try:
        entry = controller.edit_annotation(entry_id, request.annotation)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    except PersistenceError as e:
        logger.error("Failed to save draft", extra={"entry_id": entry_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return EntryResponse.from_domain(entry)


@router.delete("/words/{entry_id}")
async def remove_entry(
    entry_id: str,
    controller: DraftController = Depends(get_draft_controller),
):
    try:
        controller.remove_entry(entry_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    except PersistenceError as e:
        logger.error("Failed to save draft", extra={"entry_id": entry_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return {"success": True, "id": entry_id}


@router.post("/finalize", response_model=Optional[CollectionResponse])
async def finalize_draft(controller: DraftController = Depends(get_draft_controller)):
    """Commit the draft. Returns null when the draft had no entries."""
    try:
        committed = controller.finalize()
    except PersistenceError as e:
        logger.error("Failed to finalize draft", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return CollectionResponse.from_domain(committed) if committed else None


@router.delete("")
async def discard_draft(controller: DraftController = Depends(get_draft_controller)):
    try:
        controller.discard()
    except PersistenceError as e:
        logger.error("Failed to discard draft", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    return {"success": True}
