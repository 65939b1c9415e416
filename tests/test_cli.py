# Tests for the command line
# ===========================

import pytest

from glossa.cli import main


@pytest.fixture
def csv_path(sample_df, tmp_path):
    path = tmp_path / "glossary.csv"
    sample_df.to_csv(path, index=False)
    return str(path)


class TestCli:
    """Command line tests."""

    def test_load_then_search(self, temp_duckdb_path, csv_path, capsys):
        """Test loading a CSV and searching it."""
        assert main(["--db", temp_duckdb_path, "load", csv_path]) == 0
        assert "Loaded 7 entries" in capsys.readouterr().out

        assert main(["--db", temp_duckdb_path, "search", "dam [animal]"]) == 0
        out = capsys.readouterr().out
        assert "dama: A gazelle of the Sahara region" in out
        assert "2 result(s)" in out

    def test_substring_mode(self, loaded_db_path, capsys):
        """Test that --substring switches term lookups to substring matching."""
        assert main(["--db", loaded_db_path, "search", "dam", "--substring"]) == 0
        assert "5 result(s)" in capsys.readouterr().out

    def test_max_distance(self, loaded_db_path, capsys):
        """Test that --max-distance overrides the fuzzy threshold."""
        assert main(["--db", loaded_db_path, "search", "dam", "--max-distance", "0"]) == 0
        assert "1 result(s)" in capsys.readouterr().out

    def test_query_without_filters(self, loaded_db_path, capsys):
        """Test exit code 1 for a query with no filters."""
        assert main(["--db", loaded_db_path, "search", "123"]) == 1
        assert "No filters" in capsys.readouterr().out

    def test_load_missing_file(self, temp_duckdb_path):
        """Test exit code 1 when the CSV does not exist."""
        assert main(["--db", temp_duckdb_path, "load", "/nonexistent.csv"]) == 1

    def test_search_without_glossary_is_partial(self, temp_duckdb_path, capsys):
        """Test exit code 2 and warnings when lookups fail."""
        assert main(["--db", temp_duckdb_path, "search", "dam"]) == 2
        assert "warning" in capsys.readouterr().err
