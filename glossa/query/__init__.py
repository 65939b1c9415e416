# Glossa Query Module
# ====================
"""
Query resolution core.

Components:
- parse_query: splits a search string into Term/Definition/Tag/Locale filters
- levenshtein: edit distance used for fuzzy term matching
- QueryService: OR-retrieval of candidates, tag/locale enrichment and
  AND-narrowing of the results
"""

from glossa.models import (
    Entry,
    Tag,
    Locale,
    Filter,
    FilterType,
    CompositeEntry,
    SearchFailure,
    SearchOutcome,
    TermMatchMode,
)

from .edit_distance import (
    levenshtein,
    within_distance,
    LEVENSHTEIN_DISTANCE,
)

from .parser import (
    parse_query,
    convert_strings_to_filters,
    filters_to_string,
    remove_filter,
)

from .service import (
    QueryService,
    InvalidQueryError,
    check_tags,
    check_locales,
    create_query_service,
)


__all__ = [
    # Models
    "Entry",
    "Tag",
    "Locale",
    "Filter",
    "FilterType",
    "CompositeEntry",
    "SearchFailure",
    "SearchOutcome",
    "TermMatchMode",

    # Edit distance
    "levenshtein",
    "within_distance",
    "LEVENSHTEIN_DISTANCE",

    # Parser
    "parse_query",
    "convert_strings_to_filters",
    "filters_to_string",
    "remove_filter",

    # Service
    "QueryService",
    "InvalidQueryError",
    "check_tags",
    "check_locales",
    "create_query_service",
]
