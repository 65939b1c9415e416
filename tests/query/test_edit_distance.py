# Tests for levenshtein
# ======================

import pytest

from rapidfuzz.distance import Levenshtein

from glossa.query.edit_distance import levenshtein, within_distance, LEVENSHTEIN_DISTANCE


class TestLevenshtein:
    """Edit distance values."""

    def test_empty_source(self):
        """Test distance from an empty string."""
        assert levenshtein("", "abc") == 3

    def test_empty_target(self):
        """Test distance to an empty string."""
        assert levenshtein("abcd", "") == 4

    def test_both_empty(self):
        """Test distance between two empty strings."""
        assert levenshtein("", "") == 0

    def test_identical(self):
        """Test identical strings have distance 0."""
        assert levenshtein("abc", "abc") == 0

    def test_kitten_sitting(self):
        """Test the classic kitten/sitting pair."""
        assert levenshtein("kitten", "sitting") == 3

    def test_single_edits(self):
        """Test insertion, deletion and substitution cost 1."""
        assert levenshtein("dam", "dame") == 1   # insertion
        assert levenshtein("dame", "dam") == 1   # deletion
        assert levenshtein("dam", "dim") == 1    # substitution

    def test_case_sensitive(self):
        """Test that case differences count as edits."""
        assert levenshtein("a", "A") == 1
        assert levenshtein("Dam", "dam") == 1

    def test_symmetric(self):
        """Test distance is symmetric."""
        assert levenshtein("flaw", "lawn") == levenshtein("lawn", "flaw") == 2

    @pytest.mark.parametrize("a,b", [
        ("dam", "data"),
        ("glossary", "glosary"),
        ("intention", "execution"),
        ("en-AU", "en-GB"),
        ("a", "xyz"),
    ])
    def test_matches_rapidfuzz(self, a, b):
        """Agrees with the RapidFuzz implementation."""
        assert levenshtein(a, b) == Levenshtein.distance(a, b)


class TestWithinDistance:
    """Threshold predicate."""

    def test_default_threshold(self):
        """Test within_distance with the default threshold."""
        assert LEVENSHTEIN_DISTANCE == 3
        assert within_distance("kitten", "sitting")
        assert not within_distance("dam", "energy")

    def test_custom_threshold(self):
        """Test within_distance with a tighter threshold."""
        assert within_distance("dam", "dame", max_distance=1)
        assert not within_distance("dam", "data", max_distance=1)
