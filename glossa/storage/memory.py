# Glossa Storage - In-Memory Glossary
# ====================================
"""
Dictionary-backed glossary implementing all three store interfaces.

Term distance lookups scan the term list with RapidFuzz, which is fast
enough for glossaries that fit in memory.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from glossa.models import Entry, Locale, Tag

from .base import DefinitionStore, LocaleStore, TagStore

logger = logging.getLogger(__name__)


class InMemoryGlossary(DefinitionStore, TagStore, LocaleStore):
    """
    Glossary held in plain dictionaries.

    Example:
        glossary = InMemoryGlossary()
        glossary.add_entry(
            Entry("1", "dam", "A barrier that holds back water"),
            tags=[Tag("engineering")],
            locales=[Locale("en-AU")]
        )
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._entries: Dict[str, Entry] = {}
        self._entries_by_term: Dict[str, List[Entry]] = defaultdict(list)
        self._tags: Dict[str, List[Tag]] = defaultdict(list)
        self._locales: Dict[str, List[Locale]] = defaultdict(list)
        self._terms: List[str] = []

        for entry in entries or []:
            self.add_entry(entry)

    def add_entry(self,
                  entry: Entry,
                  tags: Iterable[Tag] = (),
                  locales: Iterable[Locale] = ()) -> None:
        """Add an entry with its tags and locales, replacing any entry with the same id."""
        if entry.entry_id in self._entries:
            self.remove_entry(entry.entry_id)

        self._entries[entry.entry_id] = entry
        if entry.term not in self._entries_by_term:
            self._terms.append(entry.term)
        self._entries_by_term[entry.term].append(entry)

        for tag in tags:
            if tag not in self._tags[entry.entry_id]:
                self._tags[entry.entry_id].append(tag)
        for locale in locales:
            if locale not in self._locales[entry.entry_id]:
                self._locales[entry.entry_id].append(locale)

    def remove_entry(self, entry_id: str) -> None:
        """Remove an entry and its tag/locale links."""
        entry = self._entries.pop(entry_id, None)
        if entry is None:
            return

        remaining = [e for e in self._entries_by_term[entry.term] if e.entry_id != entry_id]
        if remaining:
            self._entries_by_term[entry.term] = remaining
        else:
            del self._entries_by_term[entry.term]
            self._terms.remove(entry.term)

        self._tags.pop(entry_id, None)
        self._locales.pop(entry_id, None)

    # DefinitionStore

    def find_by_definition(self, text: str) -> List[Entry]:
        return [e for e in self._entries.values() if text in e.definition]

    def find_by_term(self, text: str) -> List[Entry]:
        return [e for e in self._entries.values() if text in e.term]

    def find_terms_within(self, term: str, max_distance: int) -> List[str]:
        if not self._terms:
            return []

        matches = process.extract(
            term,
            self._terms,
            scorer=Levenshtein.distance,
            score_cutoff=max_distance,
            limit=None
        )
        return sorted(value for value, _, _ in matches)

    def first_entry_for_term(self, term: str) -> Optional[Entry]:
        entries = self._entries_by_term.get(term)
        if not entries:
            return None
        return min(entries, key=lambda e: e.entry_id)

    # TagStore

    def tag_exists(self, name: str) -> bool:
        wanted = Tag(name)
        return any(wanted in tags for tags in self._tags.values())

    def tags_for(self, entry_id: str) -> List[Tag]:
        return list(self._tags.get(entry_id, []))

    def entries_tagged(self, name: str) -> List[Entry]:
        wanted = Tag(name)
        return [self._entries[eid] for eid, tags in self._tags.items() if wanted in tags]

    # LocaleStore

    def locale_exists(self, code: str) -> bool:
        wanted = Locale(code)
        return any(wanted in locales for locales in self._locales.values())

    def locales_for(self, entry_id: str) -> List[Locale]:
        return list(self._locales.get(entry_id, []))

    def entries_in_locale(self, code: str) -> List[Entry]:
        wanted = Locale(code)
        return [self._entries[eid] for eid, locales in self._locales.items() if wanted in locales]

    def terms(self) -> Set[str]:
        """All distinct terms."""
        return set(self._terms)

    def __len__(self) -> int:
        return len(self._entries)
