# Glossa Storage Module
# ======================
"""
Storage collaborators for the query service.

Components:
- DefinitionStore / TagStore / LocaleStore: interfaces the service consumes
- InMemoryGlossary: dictionary-backed store with RapidFuzz term lookups
- DuckDBGlossary: DuckDB-backed store
- GlossaryLoader: loads CSV glossaries into DuckDB
"""

from .base import (
    DefinitionStore,
    TagStore,
    LocaleStore,
    StorageError,
)

from .memory import InMemoryGlossary

from .duckdb_store import DuckDBGlossary

from .loader import (
    GlossaryLoader,
    LoadStatistics,
    COLUMN_MAPPINGS,
)


__all__ = [
    # Interfaces
    "DefinitionStore",
    "TagStore",
    "LocaleStore",
    "StorageError",

    # Adapters
    "InMemoryGlossary",
    "DuckDBGlossary",

    # Loader
    "GlossaryLoader",
    "LoadStatistics",
    "COLUMN_MAPPINGS",
]
