"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from wordcapture.api.dependencies import STORAGE_BACKEND, get_collection_store
from wordcapture.services.collection_store import CollectionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(store: CollectionStore = Depends(get_collection_store)):
    """Health check endpoint with storage status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    try:
        healthy = store.ping()
        message = "Connection successful" if healthy else "Connection failed or not configured"
        if healthy and not store.ensure_loaded():
            healthy = False
            message = "Stored state could not be read; writes are blocked"
    except Exception as e:
        healthy = False
        message = f"Connection error: {str(e)[:200]}"

    health_status["services"]["storage"] = {
        "backend": STORAGE_BACKEND,
        "status": "healthy" if healthy else "unhealthy",
        "message": message,
    }

    if not healthy:
        health_status["status"] = "degraded"
        logger.warning("Storage health check failed", extra={"backend": STORAGE_BACKEND})

    status_code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=health_status, status_code=status_code)
