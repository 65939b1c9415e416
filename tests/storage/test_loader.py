# Tests for GlossaryLoader
# =========================

import os

import duckdb
import pandas as pd
import pytest

from glossa.query import QueryService
from glossa.storage import DuckDBGlossary, GlossaryLoader, LoadStatistics


class TestGlossaryLoader:
    """GlossaryLoader tests."""

    def test_load_dataframe_counts(self, temp_duckdb_path, sample_df):
        """Test load statistics."""
        stats = GlossaryLoader(temp_duckdb_path).load_dataframe(sample_df)
        assert isinstance(stats, LoadStatistics)
        assert stats.entries == 7
        assert stats.tags == 9
        assert stats.locales == 9
        assert stats.source == "dataframe"

    def test_load_from_csv(self, temp_duckdb_path, sample_df, tmp_path):
        """Test loading from a CSV file."""
        csv_path = tmp_path / "glossary.csv"
        sample_df.to_csv(csv_path, index=False)

        loader = GlossaryLoader(temp_duckdb_path)
        stats = loader.load_from_csv(str(csv_path))

        assert stats.entries == 7
        assert stats.source == str(csv_path)
        assert loader.is_available()

    def test_missing_file(self, temp_duckdb_path):
        """Test missing CSV raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            GlossaryLoader(temp_duckdb_path).load_from_csv("/nonexistent/glossary.csv")

    def test_missing_columns(self, temp_duckdb_path):
        """Test missing required column raises ValueError."""
        df = pd.DataFrame({"entry_id": ["1"], "term": ["dam"]})
        with pytest.raises(ValueError, match="definition"):
            GlossaryLoader(temp_duckdb_path).load_dataframe(df)

    def test_column_aliases(self, temp_duckdb_path):
        """Test column aliases are normalized."""
        df = pd.DataFrame({
            "ID": ["10", "11"],
            "Word": ["kelp", "help"],
            "Meaning": ["A large seaweed", "Assistance"],
            "Tag": ["ocean", ""],
        })
        stats = GlossaryLoader(temp_duckdb_path).load_dataframe(df)
        assert stats.entries == 2
        assert stats.tags == 1
        assert stats.locales == 0

        store = DuckDBGlossary(temp_duckdb_path)
        entry = store.first_entry_for_term("kelp")
        assert entry.entry_id == "10"
        assert entry.rank == "0"
        assert [t.name for t in store.tags_for("10")] == ["ocean"]

    def test_reload_replaces_tables(self, temp_duckdb_path, sample_df):
        """Test reloading replaces existing data."""
        loader = GlossaryLoader(temp_duckdb_path)
        loader.load_dataframe(sample_df)
        stats = loader.load_dataframe(sample_df.head(2))
        assert stats.entries == 2

        conn = duckdb.connect(temp_duckdb_path)
        try:
            assert conn.execute("SELECT COUNT(*) FROM glossary_entries").fetchone()[0] == 2
        finally:
            conn.close()

    def test_not_available_before_load(self, temp_duckdb_path):
        """Test glossary is unavailable before loading."""
        assert not os.path.exists(temp_duckdb_path)
        assert not GlossaryLoader(temp_duckdb_path).is_available()

    def test_rows_without_term_skipped(self, temp_duckdb_path, caplog):
        """Test rows with no term are skipped."""
        df = pd.DataFrame({
            "entry_id": ["1", "2", "3"],
            "term": ["dam", None, "  "],
            "definition": ["The female parent of an animal", "Orphan row", "Blank term"],
            "tags": ["animal", "animal", "animal"],
        })
        stats = GlossaryLoader(temp_duckdb_path).load_dataframe(df)
        assert stats.entries == 1
        assert "Skipping 2 rows with no term" in caplog.text

        store = DuckDBGlossary(temp_duckdb_path)
        outcome = QueryService(store, store, store).search("dam [animal]")
        assert [e.entry_id for e in outcome.entries] == ["1"]
        assert not outcome.partial

    def test_locale_table_holds_codes_only(self, loaded_db_path):
        """Test locale table columns."""
        conn = duckdb.connect(loaded_db_path)
        try:
            columns = [r[0] for r in conn.execute("DESCRIBE glossary_locales").fetchall()]
        finally:
            conn.close()
        assert columns == ["entry_id", "code"]
