"""FastAPI application entry point."""

import os
import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
# Must be called before importing modules that read env vars at import time
load_dotenv()

from wordcapture import __version__ as VERSION
from wordcapture.api.routes import collections, draft, health, imports
from wordcapture.utils.logging import setup_structured_logging

setup_structured_logging(os.getenv("LOG_LEVEL", "INFO"))

logger = logging.getLogger(__name__)

SERVICE_NAME = "wordcapture"

app = FastAPI(
    title=SERVICE_NAME,
    description="Capture word lists, validate them against a dictionary, keep them as collections",
    version=VERSION,
)

cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False  # Browsers don't support credentials with wildcard
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(collections.router)
app.include_router(draft.router)
app.include_router(imports.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


def run():
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)


if __name__ == "__main__":
    run()
