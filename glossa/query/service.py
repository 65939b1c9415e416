# Glossa Query - Query Service
# =============================
"""
Resolves parsed filters into glossary entries.

Search Flow:
1. Parse the query into filters, validate tag/locale filters
2. Maximum result set: entries matching ANY filter (one lookup per filter)
3. Complete definitions: join each candidate with its tags and locales
4. Filter results: keep entries passing ALL filters

A storage failure for one filter or one candidate does not abort the
search. It is logged and recorded as a SearchFailure so callers can tell
an incomplete result apart from an empty one.
"""

import logging
from typing import Iterable, List, Optional, Set

from glossa.models import (
    CompositeEntry,
    Entry,
    Filter,
    FilterType,
    Locale,
    SearchFailure,
    SearchOutcome,
    Tag,
    TermMatchMode,
)
from glossa.storage.base import DefinitionStore, LocaleStore, StorageError, TagStore

from .edit_distance import LEVENSHTEIN_DISTANCE, within_distance
from .parser import parse_query

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a lookup is asked to search for nothing."""
    pass


class QueryService:
    """
    Glossary search over three storage collaborators.

    The service holds no per-search state; every call works only on its
    arguments and fresh storage lookups.

    Example:
        service = QueryService(glossary, glossary, glossary)
        outcome = service.search('[science] "energy" (en-AU)')
        for entry in outcome.entries:
            print(entry.term)
    """

    def __init__(
        self,
        definitions: DefinitionStore,
        tags: TagStore,
        locales: LocaleStore,
        max_distance: int = LEVENSHTEIN_DISTANCE,
        term_match: TermMatchMode = TermMatchMode.FUZZY
    ):
        """
        Initialize the query service.

        Args:
            definitions: Entry/term lookups
            tags: Tag lookups
            locales: Locale lookups
            max_distance: Edit distance threshold for Term filters
            term_match: How Term filters fetch candidates
        """
        if definitions is None or tags is None or locales is None:
            raise ValueError("definition, tag and locale stores must be non-null.")

        self.definitions = definitions
        self.tags = tags
        self.locales = locales
        self.max_distance = max_distance
        self.term_match = term_match

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def search(self, query: str) -> SearchOutcome:
        """
        Resolve a raw query string.

        Args:
            query: The search string typed by the user

        Returns:
            SearchOutcome with the filters used, the matching entries and
            any storage failures met along the way
        """
        outcome = SearchOutcome(query=query or "")
        outcome.filters = self.parse(query)
        outcome.entries = self.perform_search(outcome.filters, outcome.failures)

        if outcome.partial:
            logger.warning(
                f"Search {query!r} completed with {len(outcome.failures)} failed lookups"
            )
        logger.info(
            f"Search {query!r}: {len(outcome.filters)} filters, {len(outcome.entries)} results"
        )
        return outcome

    def perform_search(self,
                       filters: Set[Filter],
                       failures: Optional[List[SearchFailure]] = None) -> Set[Entry]:
        """
        Return the entries that satisfy every filter.

        Args:
            filters: Parsed filters
            failures: Optional list that receives failed lookups

        Returns:
            Set of bare entries
        """
        candidates = self.get_maximum_result_set(filters, failures)
        complete = self.get_complete_definitions(candidates, failures)
        return self.filter_results(complete, filters)

    # ------------------------------------------------------------------
    # Parsing and validation
    # ------------------------------------------------------------------

    def parse(self, query: str) -> Set[Filter]:
        """Parse a query and validate its tag and locale filters."""
        return self.validate_filters(parse_query(query))

    def validate_filters(self, filters: Set[Filter]) -> Set[Filter]:
        """
        Mark tag and locale filters that exist in storage as verified.

        Term and definition filters are left unverified. A failed existence
        check leaves the filter unverified.
        """
        for f in filters:
            try:
                if f.filter_type == FilterType.TAG:
                    if self.tags.tag_exists(f.query):
                        f.verified = True
                elif f.filter_type == FilterType.LOCALE:
                    if self.locales.locale_exists(f.query):
                        f.verified = True
            except StorageError as e:
                logger.warning(f"Could not verify filter {f}: {e}")

        return filters

    # ------------------------------------------------------------------
    # Step 2: maximum result set
    # ------------------------------------------------------------------

    def get_maximum_result_set(self,
                               filters: Iterable[Filter],
                               failures: Optional[List[SearchFailure]] = None) -> Set[Entry]:
        """
        Union of the entries matching each filter on its own.

        Deliberately broader than the final answer; filter_results narrows it.
        """
        definitions: Set[Entry] = set()

        for f in filters:
            try:
                definitions.update(self._lookup(f))
            except (StorageError, InvalidQueryError) as e:
                logger.warning(f"Lookup for filter {f} failed: {e}")
                if failures is not None:
                    failures.append(SearchFailure(stage="retrieve", message=str(e), filter=f))

        logger.debug(f"Maximum result set holds {len(definitions)} entries")
        return definitions

    def _lookup(self, f: Filter) -> List[Entry]:
        if f.filter_type == FilterType.DEFINITION:
            return self.definition_search(f.query)
        elif f.filter_type == FilterType.LOCALE:
            return self.locales.entries_in_locale(f.query)
        elif f.filter_type == FilterType.TAG:
            return self.tags.entries_tagged(f.query)
        elif self.term_match == TermMatchMode.SUBSTRING:
            return self.term_search(f.query)
        else:
            return self.fuzzy_term_search(f.query, self.max_distance)

    def definition_search(self, text: str) -> List[Entry]:
        """Entries whose definition contains text."""
        return self.definitions.find_by_definition(text)

    def term_search(self, text: str) -> List[Entry]:
        """Entries whose term contains text."""
        return self.definitions.find_by_term(text)

    def fuzzy_term_search(self, term: Optional[str], max_distance: int = LEVENSHTEIN_DISTANCE) -> List[Entry]:
        """
        Entries for every term within max_distance edits of term.

        Each close term is represented by its first entry. Terms that no
        longer resolve to an entry are skipped.

        Args:
            term: The term to look for
            max_distance: Maximum edit distance

        Returns:
            List of entries, one per close term

        Raises:
            InvalidQueryError: term is empty or None
            StorageError: the term lookup failed
        """
        if not term:
            raise InvalidQueryError("The supplied term must be non-null and non-empty.")

        results = []
        for close_term in self.definitions.find_terms_within(term, max_distance):
            entry = self.definitions.first_entry_for_term(close_term)
            if entry is not None:
                results.append(entry)

        logger.debug(f"Fuzzy lookup {term!r} (<= {max_distance}) matched {len(results)} terms")
        return results

    # ------------------------------------------------------------------
    # Step 3: complete definitions
    # ------------------------------------------------------------------

    def get_complete_definitions(self,
                                 entries: Iterable[Entry],
                                 failures: Optional[List[SearchFailure]] = None) -> List[CompositeEntry]:
        """
        Join every entry with its tags and locales.

        Entries whose tags or locales cannot be fetched are left out, since
        tag and locale filters could not be judged for them.
        """
        results = []

        for entry in entries:
            try:
                tags = self.tags.tags_for(entry.entry_id)
                locales = self.locales.locales_for(entry.entry_id)
            except StorageError as e:
                logger.warning(f"Could not load tags/locales for entry {entry.entry_id}: {e}")
                if failures is not None:
                    failures.append(SearchFailure(
                        stage="assemble",
                        message=str(e),
                        entry_id=entry.entry_id
                    ))
                continue

            results.append(CompositeEntry(entry, list(tags), list(locales)))

        return results

    # ------------------------------------------------------------------
    # Step 4: filter results
    # ------------------------------------------------------------------

    def filter_results(self,
                       composites: Iterable[CompositeEntry],
                       filters: Iterable[Filter]) -> Set[Entry]:
        """
        Keep the entries that pass every filter.

        Args:
            composites: Candidates joined with their tags and locales
            filters: Filters every survivor must pass

        Returns:
            Set of bare entries
        """
        filters = list(filters)
        results: Set[Entry] = set()

        for composite in composites:
            if all(self._passes(composite, f) for f in filters):
                results.add(composite.entry)

        return results

    def _passes(self, composite: CompositeEntry, f: Filter) -> bool:
        entry = composite.entry

        if f.filter_type == FilterType.TAG:
            return check_tags(composite.tags, f.query)
        elif f.filter_type == FilterType.DEFINITION:
            return f.query in entry.definition
        elif f.filter_type == FilterType.LOCALE:
            return check_locales(composite.locales, f.query)
        else:
            return (within_distance(entry.term, f.query, self.max_distance)
                    and f.query in entry.term)


def check_tags(tags: Iterable[Tag], name: str) -> bool:
    """True if any tag is called name, ignoring case."""
    name_lower = name.lower()
    return any(tag.name.lower() == name_lower for tag in tags)


def check_locales(locales: Iterable[Locale], code: str) -> bool:
    """True if any locale has the short code, ignoring case."""
    code_lower = code.lower()
    return any(locale.code.lower() == code_lower for locale in locales)


def create_query_service(settings=None) -> QueryService:
    """
    Factory function to create a QueryService over a DuckDB glossary.

    Args:
        settings: Optional GlossaSettings; read from the environment if omitted

    Returns:
        Configured QueryService instance
    """
    from glossa.config import GlossaSettings
    from glossa.storage.duckdb_store import DuckDBGlossary

    if settings is None:
        settings = GlossaSettings.from_env()

    glossary = DuckDBGlossary(settings.db_path)
    logger.info(f"Query service using glossary at {settings.db_path}")

    return QueryService(
        definitions=glossary,
        tags=glossary,
        locales=glossary,
        max_distance=settings.max_edit_distance,
        term_match=settings.term_match
    )
