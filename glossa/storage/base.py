# Glossa Storage - Interfaces
# ============================
"""
Read-only collaborator interfaces consumed by the query service.

Adapters raise StorageError for any backend failure so the service can
tell "lookup failed" apart from "nothing matched".
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from glossa.models import Entry, Locale, Tag


class StorageError(Exception):
    """Raised when a storage backend cannot answer a lookup."""

    def __init__(self, operation: str, reason: str = None):
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"Storage lookup '{operation}' failed: {reason or 'Unknown error'}"
        )


class DefinitionStore(ABC):
    """Lookups over entries and their terms."""

    @abstractmethod
    def find_by_definition(self, text: str) -> List[Entry]:
        """Entries whose definition text contains text (case-sensitive)."""
        pass

    @abstractmethod
    def find_by_term(self, text: str) -> List[Entry]:
        """Entries whose term contains text (case-sensitive)."""
        pass

    @abstractmethod
    def find_terms_within(self, term: str, max_distance: int) -> List[str]:
        """Distinct terms at most max_distance edits away from term."""
        pass

    @abstractmethod
    def first_entry_for_term(self, term: str) -> Optional[Entry]:
        """The representative entry for a term (lowest entry id), if any."""
        pass


class TagStore(ABC):
    """Lookups over tags."""

    @abstractmethod
    def tag_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def tags_for(self, entry_id: str) -> List[Tag]:
        pass

    @abstractmethod
    def entries_tagged(self, name: str) -> List[Entry]:
        pass


class LocaleStore(ABC):
    """Lookups over locales."""

    @abstractmethod
    def locale_exists(self, code: str) -> bool:
        pass

    @abstractmethod
    def locales_for(self, entry_id: str) -> List[Locale]:
        pass

    @abstractmethod
    def entries_in_locale(self, code: str) -> List[Entry]:
        pass
