# Glossa - Models
# ================
"""
Dataclasses shared by the query parser, the query service and the
storage adapters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set


class FilterType(str, Enum):
    """Kinds of search criteria a query can contain."""
    TERM = "term"
    DEFINITION = "definition"
    TAG = "tag"
    LOCALE = "locale"


class TermMatchMode(str, Enum):
    """How Term filters fetch their candidates."""
    FUZZY = "fuzzy"          # Edit-distance term lookup
    SUBSTRING = "substring"  # Literal substring of the term


# Delimiters used when a filter is written back as query text
FILTER_DELIMITERS = {
    FilterType.TERM: ("", ""),
    FilterType.DEFINITION: ('"', '"'),
    FilterType.TAG: ("[", "]"),
    FilterType.LOCALE: ("(", ")"),
}


@dataclass(frozen=True)
class Entry:
    """A single glossary definition. Identity is the entry id."""
    entry_id: str
    term: str = field(compare=False)
    definition: str = field(compare=False)
    rank: str = field(default="0", compare=False)  # Opaque, string-encoded


@dataclass(frozen=True, eq=False)
class Tag:
    """A tag attached to entries. Names compare case-insensitively."""
    name: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.name.lower() == other.name.lower()

    def __hash__(self) -> int:
        return hash(self.name.lower())


@dataclass(frozen=True, eq=False)
class Locale:
    """A locale attached to entries, e.g. en-AU. Codes compare case-insensitively."""
    code: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locale):
            return NotImplemented
        return self.code.lower() == other.code.lower()

    def __hash__(self) -> int:
        return hash(self.code.lower())


@dataclass(unsafe_hash=True)
class Filter:
    """
    One typed search criterion parsed from a query.

    Two filters are the same filter when type and query match;
    the verified flag is annotation only.
    """
    filter_type: FilterType
    query: str
    verified: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        opening, closing = FILTER_DELIMITERS[self.filter_type]
        return f"{opening}{self.query}{closing}"


@dataclass(eq=False)
class CompositeEntry:
    """
    An entry joined with all of its tags and locales.

    Lives only for the duration of one search so that filtering does not
    go back to storage for every filter.
    """
    entry: Entry
    tags: List[Tag] = field(default_factory=list)
    locales: List[Locale] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CompositeEntry):
            return self.entry == other.entry
        if isinstance(other, Entry):
            return self.entry == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.entry)


@dataclass
class SearchFailure:
    """A storage failure recorded while a search kept going."""
    stage: str                      # "retrieve" or "assemble"
    message: str
    filter: Optional[Filter] = None
    entry_id: Optional[str] = None


@dataclass
class SearchOutcome:
    """Result of resolving a raw query string."""
    query: str
    filters: Set[Filter] = field(default_factory=set)
    entries: Set[Entry] = field(default_factory=set)
    failures: List[SearchFailure] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        """True when some lookups failed and the result may be incomplete."""
        return len(self.failures) > 0

    def sorted_entries(self) -> List[Entry]:
        """Entries ordered by term, then id, for stable presentation."""
        return sorted(self.entries, key=lambda e: (e.term, e.entry_id))
