# Glossa Storage - Glossary Loader
# =================================
"""
Loads a glossary from CSV into DuckDB for DuckDBGlossary lookups.

Expected CSV structure (one row per entry):
- entry_id, term, definition, rank
- tags: ';' separated tag names (optional)
- locales: ';' separated locale codes (optional)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import duckdb
import pandas as pd

logger = logging.getLogger(__name__)

# Column aliases accepted in source files
COLUMN_MAPPINGS = {
    "entry_id": ["entry_id", "id", "def_id", "defid"],
    "term": ["term", "word", "headword"],
    "definition": ["definition", "meaning", "description"],
    "rank": ["rank", "score"],
    "tags": ["tags", "tag"],
    "locales": ["locales", "locale"],
}

REQUIRED_COLUMNS = ["entry_id", "term", "definition"]

LIST_SEPARATOR = ";"


@dataclass
class LoadStatistics:
    """Counts from one glossary load."""
    entries: int
    tags: int
    locales: int
    loaded_at: str
    source: str


class GlossaryLoader:
    """Creates the glossary tables and fills them from tabular data."""

    def __init__(self, db_path: str):
        """
        Initialize glossary loader.

        Args:
            db_path: Path to DuckDB database
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def load_from_csv(self, csv_path: str) -> LoadStatistics:
        """
        Load a glossary from a CSV file, replacing existing glossary tables.

        Args:
            csv_path: Path to CSV file

        Returns:
            LoadStatistics with row counts
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Glossary file not found: {csv_path}")

        logger.info(f"Loading glossary from {csv_path}")
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        return self.load_dataframe(df, source=str(csv_path))

    def load_dataframe(self, df: pd.DataFrame, source: str = "dataframe") -> LoadStatistics:
        """Load a glossary from a DataFrame, replacing existing glossary tables."""
        df = self._normalize_columns(df)

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Glossary is missing required columns: {', '.join(missing)}")

        self._create_tables()
        stats = self._load_data(df, source)

        logger.info(
            f"Glossary loaded: {stats.entries} entries, {stats.tags} tag links, "
            f"{stats.locales} locale links"
        )
        return stats

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize column names to standard format."""
        df = df.copy()
        df.columns = [str(c).lower().strip() for c in df.columns]

        rename_map = {}
        for standard_name, variants in COLUMN_MAPPINGS.items():
            for variant in variants:
                if variant in df.columns:
                    rename_map[variant] = standard_name
                    break

        if rename_map:
            df = df.rename(columns=rename_map)

        return df

    def _create_tables(self):
        """Create glossary tables in DuckDB."""
        conn = duckdb.connect(str(self.db_path))

        try:
            conn.execute("DROP TABLE IF EXISTS glossary_entries")
            conn.execute("DROP TABLE IF EXISTS glossary_tags")
            conn.execute("DROP TABLE IF EXISTS glossary_locales")

            conn.execute("""
                CREATE TABLE glossary_entries (
                    entry_id VARCHAR,
                    term VARCHAR,
                    definition VARCHAR,
                    rank VARCHAR
                )
            """)

            # Many-to-many link tables
            conn.execute("""
                CREATE TABLE glossary_tags (
                    entry_id VARCHAR,
                    name VARCHAR
                )
            """)

            conn.execute("""
                CREATE TABLE glossary_locales (
                    entry_id VARCHAR,
                    code VARCHAR
                )
            """)

        finally:
            conn.close()

    @staticmethod
    def _explode(df: pd.DataFrame, column: str, target: str) -> pd.DataFrame:
        """Split a ';' separated column into one (entry_id, value) row per item."""
        if column not in df.columns:
            return pd.DataFrame({"entry_id": pd.Series(dtype=str), target: pd.Series(dtype=str)})

        links = df[["entry_id", column]].copy()
        links[column] = links[column].fillna("").astype(str).str.split(LIST_SEPARATOR)
        links = links.explode(column)
        links[column] = links[column].str.strip()
        links = links[links[column] != ""]
        links = links.rename(columns={column: target}).drop_duplicates()
        return links

    def _load_data(self, df: pd.DataFrame, source: str) -> LoadStatistics:
        """Load data into DuckDB tables."""
        if "rank" not in df.columns:
            df["rank"] = "0"

        df["entry_id"] = df["entry_id"].astype(str).str.strip()
        df = df[df["entry_id"] != ""].copy()

        df["term"] = df["term"].fillna("").astype(str).str.strip()
        df["definition"] = df["definition"].fillna("").astype(str)
        blank_terms = df["term"] == ""
        if blank_terms.any():
            logger.warning(f"Skipping {int(blank_terms.sum())} rows with no term")
            df = df[~blank_terms]

        entries_df = df[["entry_id", "term", "definition", "rank"]].drop_duplicates(subset=["entry_id"])
        tags_df = self._explode(df, "tags", "name")
        locales_df = self._explode(df, "locales", "code")

        conn = duckdb.connect(str(self.db_path))

        try:
            conn.execute("""
                INSERT INTO glossary_entries
                SELECT entry_id, term, definition, rank FROM entries_df
            """)
            conn.execute("INSERT INTO glossary_tags SELECT entry_id, name FROM tags_df")
            conn.execute("INSERT INTO glossary_locales SELECT entry_id, code FROM locales_df")

            conn.execute("CREATE INDEX idx_entries_id ON glossary_entries(entry_id)")
            conn.execute("CREATE INDEX idx_entries_term ON glossary_entries(term)")
            conn.execute("CREATE INDEX idx_tags_entry ON glossary_tags(entry_id)")
            conn.execute("CREATE INDEX idx_locales_entry ON glossary_locales(entry_id)")

            return LoadStatistics(
                entries=conn.execute("SELECT COUNT(*) FROM glossary_entries").fetchone()[0],
                tags=conn.execute("SELECT COUNT(*) FROM glossary_tags").fetchone()[0],
                locales=conn.execute("SELECT COUNT(*) FROM glossary_locales").fetchone()[0],
                loaded_at=datetime.now().isoformat(),
                source=source
            )

        finally:
            conn.close()

    def is_available(self) -> bool:
        """Check if glossary tables are loaded."""
        if not self.db_path.exists():
            return False

        conn = duckdb.connect(str(self.db_path))
        try:
            result = conn.execute("""
                SELECT COUNT(*) FROM information_schema.tables
                WHERE table_name = 'glossary_entries'
            """).fetchone()
            return result[0] > 0
        finally:
            conn.close()
