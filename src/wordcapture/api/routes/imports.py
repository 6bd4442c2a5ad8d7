"""Bulk import routes.

Endpoints:
- POST /imports/preview: Extract and validate pasted text
- POST /imports/stream: Same, streamed as NDJSON progress events
- POST /imports: Commit reviewed entries as a new word list
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from wordcapture.api.dependencies import get_import_service
from wordcapture.api.models import (
    CollectionResponse,
    EntryResponse,
    ImportCommitRequest,
    ImportPreviewResponse,
    ImportTextRequest,
)
from wordcapture.domain.model.errors import DomainError, PersistenceError
from wordcapture.services.extraction import extract
from wordcapture.services.import_service import ImportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/imports", tags=["imports"])


@router.post("/preview", response_model=ImportPreviewResponse)
async def preview_import(
    request: ImportTextRequest,
    service: ImportService = Depends(get_import_service),
):
    """Validate every word in the text and return the survivors."""
    preview = await service.preview(request.text)
    return ImportPreviewResponse(
        candidate_count=preview.candidate_count,
        processed=preview.report.processed,
        rejected_count=preview.rejected_count,
        completed=preview.report.completed,
        entries=[EntryResponse.from_domain(e) for e in preview.entries],
    )


@router.post("/stream")
async def stream_import(
    request: ImportTextRequest,
    service: ImportService = Depends(get_import_service),
):
    """Stream one JSON line per validated candidate.

    Each line carries ``index``, ``progress`` and ``entry`` (null when the
    word was rejected). Closing the connection stops further lookups.
    """
    candidates = extract(request.text)

    async def events():
        async for step in service.orchestrator.stream(candidates):
            yield json.dumps({
                "index": step.index,
                "headword": candidates[step.index].headword,
                "progress": step.progress,
                "entry": EntryResponse.from_domain(step.entry).model_dump(mode="json") if step.entry else None,
            }, ensure_ascii=False) + "\n"

    return StreamingResponse(events(), media_type="application/x-ndjson")


@router.post("", response_model=CollectionResponse)
async def commit_import(
    request: ImportCommitRequest,
    service: ImportService = Depends(get_import_service),
):
    """Save reviewed entries as a new word list."""
    try:
        entries = [payload.to_domain() for payload in request.entries]
        committed = service.commit(entries, title=request.title)
    except PersistenceError as e:
        logger.error("Failed to commit import", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Could not save")
    except DomainError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if committed is None:
        raise HTTPException(status_code=400, detail="No entries to import")

    logger.info("Import committed", extra={
        "collection_id": committed.id,
        "entry_count": len(committed.entries),
    })
    return CollectionResponse.from_domain(committed)
