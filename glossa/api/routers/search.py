# Glossa API - Search Router
# ===========================
"""Glossary search endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from glossa.models import Entry, Filter, SearchFailure
from glossa.query import QueryService, create_query_service, remove_filter

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Pydantic Models
# ============================================================================

class FilterResponse(BaseModel):
    """A parsed filter."""
    type: str
    query: str
    verified: bool
    text: str
    remove_url: Optional[str] = None


class EntryResponse(BaseModel):
    """A glossary entry."""
    entry_id: str
    term: str
    definition: str
    rank: str


class FailureResponse(BaseModel):
    """A lookup that failed during the search."""
    stage: str
    message: str
    filter: Optional[str] = None
    entry_id: Optional[str] = None


class SearchResponse(BaseModel):
    """Search response."""
    query: str
    filters: List[FilterResponse]
    count: int
    results: List[EntryResponse]
    partial: bool
    failures: List[FailureResponse]


class FiltersResponse(BaseModel):
    """Parsed filters for a query."""
    query: str
    count: int
    filters: List[FilterResponse]


# ============================================================================
# Helper Functions
# ============================================================================

def get_query_service() -> QueryService:
    """Build a query service from environment settings."""
    return create_query_service()


def filter_to_response(f: Filter, remove_url: Optional[str] = None) -> FilterResponse:
    """Convert Filter to response model."""
    return FilterResponse(
        type=f.filter_type.value,
        query=f.query,
        verified=f.verified,
        text=str(f),
        remove_url=remove_url
    )


def entry_to_response(entry: Entry) -> EntryResponse:
    """Convert Entry to response model."""
    return EntryResponse(
        entry_id=entry.entry_id,
        term=entry.term,
        definition=entry.definition,
        rank=entry.rank
    )


def failure_to_response(failure: SearchFailure) -> FailureResponse:
    """Convert SearchFailure to response model."""
    return FailureResponse(
        stage=failure.stage,
        message=failure.message,
        filter=str(failure.filter) if failure.filter is not None else None,
        entry_id=failure.entry_id
    )


def _require_query(q: str) -> str:
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query must not be empty")
    return q


def _sorted_filters(filters) -> List[Filter]:
    return sorted(filters, key=lambda f: (f.filter_type.value, f.query))


# ============================================================================
# Endpoints
# ============================================================================

@router.get("", response_model=SearchResponse)
def search(
    q: str = Query(..., description="Search query, e.g. dam [engineering] (en-AU)"),
    service: QueryService = Depends(get_query_service)
):
    """Search the glossary. Every criterion in the query must match."""
    query = _require_query(q)
    outcome = service.search(query)

    return SearchResponse(
        query=outcome.query,
        filters=[filter_to_response(f) for f in _sorted_filters(outcome.filters)],
        count=len(outcome.entries),
        results=[entry_to_response(e) for e in outcome.sorted_entries()],
        partial=outcome.partial,
        failures=[failure_to_response(f) for f in outcome.failures]
    )


@router.get("/filters", response_model=FiltersResponse)
def parse_filters(
    q: str = Query(..., description="Search query to parse"),
    service: QueryService = Depends(get_query_service)
):
    """Show how a query is parsed, with the query left after removing each filter."""
    query = _require_query(q)
    filters = service.parse(query)

    return FiltersResponse(
        query=query,
        count=len(filters),
        filters=[
            filter_to_response(f, remove_filter(filters, f))
            for f in _sorted_filters(filters)
        ]
    )
