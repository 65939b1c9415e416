"""
Glossa API - FastAPI Application
================================
RESTful API for glossary search.

Features:
- Query search with partial-failure reporting
- Filter inspection with per-filter removal links
- Health check
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from glossa import __version__
from glossa.config import GlossaSettings

from .routers import search

logger = logging.getLogger(__name__)

settings = GlossaSettings.from_env()

# Create FastAPI app
app = FastAPI(
    title="Glossa API",
    description="""
## Glossary Search API

Query syntax:
- `word` fuzzy term match
- `"text"` definition contains text
- `[tag]` entry carries tag
- `(en-AU)` entry is in locale

All criteria in a query must hold for an entry to be returned.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# ============================================
# Include Routers
# ============================================

app.include_router(
    search.router,
    prefix="/api/v1/search",
    tags=["Search"]
)


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "healthy", "service": "glossa", "version": __version__}


if __name__ == "__main__":
    import os

    import uvicorn
    uvicorn.run(
        "glossa.api.main:app",
        host="0.0.0.0",
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "false").lower() == "true"
    )
