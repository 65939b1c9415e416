# Glossa Query - Parser
# ======================
"""
Turns a raw search string into typed filters.

Query syntax:
- "some text"   Definition filter (text must appear in the definition)
- [science]     Tag filter
- (en-AU)       Locale filter
- word          Term filter (fuzzy matched against entry terms)

Each pattern is scanned over the whole input on its own, so a piece of
text can produce more than one filter. Filters are deduplicated on
(type, query).
"""

import re
import logging
from typing import Iterable, List, Optional, Pattern, Set

from glossa.models import Filter, FilterType

logger = logging.getLogger(__name__)


# Extraction order: definition, tag, locale, term
# Quoted text stops at any line terminator, not just \n
DEFINITION_PATTERN = re.compile(r'"[^\n\r\u0085\u2028\u2029]*?"')
TAG_PATTERN = re.compile(r'\[[^\]\r\n]+\]')
LOCALE_PATTERN = re.compile(r'\([^\]\r\n\s]*\)', re.ASCII)
TERM_PATTERN = re.compile(r'(?<!\S)[a-zA-Z]+(?!\S)', re.ASCII)

QUERY_PATTERNS: List[Pattern] = [
    DEFINITION_PATTERN,
    TAG_PATTERN,
    LOCALE_PATTERN,
    TERM_PATTERN,
]

# Order used when filters are written back out
_TYPE_ORDER = {
    FilterType.DEFINITION: 0,
    FilterType.TAG: 1,
    FilterType.LOCALE: 2,
    FilterType.TERM: 3,
}


def parse_query(query: Optional[str]) -> Set[Filter]:
    """
    Parse a query string into a set of filters.

    No storage is consulted here; see QueryService.parse for the
    validated version.

    Args:
        query: The raw search string

    Returns:
        Set of unique filters, possibly empty
    """
    if not query:
        return set()

    tokens: Set[str] = set()
    for pattern in QUERY_PATTERNS:
        for match in pattern.finditer(query):
            tokens.add(match.group(0))

    filters = convert_strings_to_filters(tokens)
    logger.debug(f"Parsed {len(filters)} filters from query {query!r}")
    return filters


def convert_strings_to_filters(tokens: Iterable[str]) -> Set[Filter]:
    """
    Classify raw tokens by their leading delimiter and strip delimiters.

    Tokens that are empty once stripped ("" or ()) are dropped.
    """
    filters: Set[Filter] = set()

    for token in tokens:
        if token.startswith("["):
            filter_type = FilterType.TAG
            query = token[1:-1]
        elif token.startswith('"'):
            filter_type = FilterType.DEFINITION
            query = token[1:-1]
        elif token.startswith("("):
            filter_type = FilterType.LOCALE
            query = token[1:-1]
        else:
            filter_type = FilterType.TERM
            query = token

        if not query:
            continue

        filters.add(Filter(filter_type, query))

    return filters


def _sort_key(f: Filter):
    return (_TYPE_ORDER[f.filter_type], f.query)


def filters_to_string(filters: Iterable[Filter], separator: str = "+") -> str:
    """
    Write filters back out as query text joined by separator.

    Output order is stable (definition, tag, locale, term; then by query)
    so the same filters always produce the same string.
    """
    return separator.join(str(f) for f in sorted(filters, key=_sort_key))


def remove_filter(filters: Set[Filter],
                  to_remove: Filter,
                  separator: str = "+") -> Optional[str]:
    """
    Build the query string that results from dropping one filter.

    Returns None when there is nothing left to search for, i.e. the set
    holds a single filter. The given set is not modified.
    """
    if len(filters) <= 1:
        return None

    remaining = {f for f in filters if f != to_remove}
    return filters_to_string(remaining, separator)
