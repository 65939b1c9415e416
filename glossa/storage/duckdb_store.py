# Glossa Storage - DuckDB Glossary
# =================================
"""
DuckDB-backed glossary implementing all three store interfaces.

Tables (created by GlossaryLoader):
- glossary_entries (entry_id, term, definition, rank)
- glossary_tags (entry_id, name)
- glossary_locales (entry_id, code)
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

import duckdb

from glossa.models import Entry, Locale, Tag

from .base import DefinitionStore, LocaleStore, StorageError, TagStore

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = "e.entry_id, e.term, e.definition, e.rank"


class DuckDBGlossary(DefinitionStore, TagStore, LocaleStore):
    """Glossary lookups against a DuckDB database file."""

    def __init__(self, db_path: str):
        """
        Initialize the glossary.

        Args:
            db_path: Path to DuckDB database with glossary tables
        """
        self.db_path = Path(db_path)

    def _connect(self) -> duckdb.DuckDBPyConnection:
        """Get database connection."""
        return duckdb.connect(str(self.db_path))

    def _fetch(self, operation: str, sql: str, params: Sequence[Any] = ()) -> List[tuple]:
        """Run a query on a fresh connection, wrapping backend errors."""
        # duckdb.connect creates missing files
        if not self.db_path.exists():
            raise StorageError(operation, f"glossary database not found: {self.db_path}")

        try:
            conn = self._connect()
        except duckdb.Error as e:
            raise StorageError(operation, str(e)) from e

        try:
            return conn.execute(sql, list(params)).fetchall()
        except duckdb.Error as e:
            raise StorageError(operation, str(e)) from e
        finally:
            conn.close()

    @staticmethod
    def _to_entry(row: tuple) -> Entry:
        return Entry(
            entry_id=str(row[0]),
            term=row[1] or "",
            definition=row[2] or "",
            rank=str(row[3]) if row[3] is not None else "0"
        )

    # DefinitionStore

    def find_by_definition(self, text: str) -> List[Entry]:
        rows = self._fetch("find_by_definition", f"""
            SELECT {ENTRY_COLUMNS} FROM glossary_entries e
            WHERE contains(e.definition, ?::VARCHAR)
            ORDER BY e.entry_id
        """, [text])
        return [self._to_entry(r) for r in rows]

    def find_by_term(self, text: str) -> List[Entry]:
        rows = self._fetch("find_by_term", f"""
            SELECT {ENTRY_COLUMNS} FROM glossary_entries e
            WHERE contains(e.term, ?::VARCHAR)
            ORDER BY e.entry_id
        """, [text])
        return [self._to_entry(r) for r in rows]

    def find_terms_within(self, term: str, max_distance: int) -> List[str]:
        rows = self._fetch("find_terms_within", """
            SELECT DISTINCT term FROM glossary_entries
            WHERE levenshtein(term, ?::VARCHAR) <= ?::INTEGER
            ORDER BY term
        """, [term, max_distance])
        return [r[0] for r in rows]

    def first_entry_for_term(self, term: str) -> Optional[Entry]:
        rows = self._fetch("first_entry_for_term", f"""
            SELECT {ENTRY_COLUMNS} FROM glossary_entries e
            WHERE e.term = ?
            ORDER BY e.entry_id
            LIMIT 1
        """, [term])
        return self._to_entry(rows[0]) if rows else None

    # TagStore

    def tag_exists(self, name: str) -> bool:
        rows = self._fetch("tag_exists", """
            SELECT COUNT(*) FROM glossary_tags WHERE lower(name) = lower(?)
        """, [name])
        return rows[0][0] > 0

    def tags_for(self, entry_id: str) -> List[Tag]:
        rows = self._fetch("tags_for", """
            SELECT DISTINCT name FROM glossary_tags
            WHERE entry_id = ?
            ORDER BY name
        """, [entry_id])
        return [Tag(r[0]) for r in rows]

    def entries_tagged(self, name: str) -> List[Entry]:
        rows = self._fetch("entries_tagged", f"""
            SELECT DISTINCT {ENTRY_COLUMNS}
            FROM glossary_entries e
            JOIN glossary_tags t ON t.entry_id = e.entry_id
            WHERE lower(t.name) = lower(?)
            ORDER BY e.entry_id
        """, [name])
        return [self._to_entry(r) for r in rows]

    # LocaleStore

    def locale_exists(self, code: str) -> bool:
        rows = self._fetch("locale_exists", """
            SELECT COUNT(*) FROM glossary_locales WHERE lower(code) = lower(?)
        """, [code])
        return rows[0][0] > 0

    def locales_for(self, entry_id: str) -> List[Locale]:
        rows = self._fetch("locales_for", """
            SELECT DISTINCT code FROM glossary_locales
            WHERE entry_id = ?
            ORDER BY code
        """, [entry_id])
        return [Locale(r[0]) for r in rows]

    def entries_in_locale(self, code: str) -> List[Entry]:
        rows = self._fetch("entries_in_locale", f"""
            SELECT DISTINCT {ENTRY_COLUMNS}
            FROM glossary_entries e
            JOIN glossary_locales l ON l.entry_id = e.entry_id
            WHERE lower(l.code) = lower(?)
            ORDER BY e.entry_id
        """, [code])
        return [self._to_entry(r) for r in rows]
