"""
Pytest fixtures shared by the Glossa tests.
"""

import os
import sys
import tempfile
import pytest
import pandas as pd
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from glossa.models import Entry, Tag, Locale
from glossa.storage import InMemoryGlossary, GlossaryLoader


# (entry_id, term, definition, tags, locales)
SAMPLE_GLOSSARY = [
    ("1", "dam", "A barrier constructed to hold back water", ["engineering", "water"], ["en-AU", "en-GB"]),
    ("2", "damn", "An expression of annoyance, often as a curse", ["slang"], ["en-US"]),
    ("3", "dame", "A title of honour given to a woman, as of knighthood", ["title"], ["en-GB"]),
    ("4", "dama", "A gazelle of the Sahara region", ["animal"], ["en-AU"]),
    ("5", "data", "Facts and statistics collected as a basis of analysis", ["science", "computing"], ["en-AU", "en-US"]),
    ("6", "energy", "The capacity of a physical system to do work", ["science"], ["en-AU"]),
    ("7", "dam", "The female parent of an animal", ["animal"], ["en-GB"]),
]


@pytest.fixture
def sample_rows():
    """Raw sample glossary rows."""
    return list(SAMPLE_GLOSSARY)


@pytest.fixture
def glossary():
    """In-memory glossary holding the sample rows."""
    store = InMemoryGlossary()
    for entry_id, term, definition, tags, locales in SAMPLE_GLOSSARY:
        store.add_entry(
            Entry(entry_id, term, definition, rank="1"),
            tags=[Tag(t) for t in tags],
            locales=[Locale(code) for code in locales]
        )
    return store


@pytest.fixture
def sample_df():
    """Sample glossary as a DataFrame in CSV layout."""
    return pd.DataFrame({
        "entry_id": [r[0] for r in SAMPLE_GLOSSARY],
        "term": [r[1] for r in SAMPLE_GLOSSARY],
        "definition": [r[2] for r in SAMPLE_GLOSSARY],
        "rank": ["1"] * len(SAMPLE_GLOSSARY),
        "tags": [";".join(r[3]) for r in SAMPLE_GLOSSARY],
        "locales": [";".join(r[4]) for r in SAMPLE_GLOSSARY],
    })


@pytest.fixture
def temp_duckdb_path():
    """Create a temporary DuckDB path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield os.path.join(tmpdir, "glossary.duckdb")


@pytest.fixture
def loaded_db_path(temp_duckdb_path, sample_df):
    """DuckDB file with the sample glossary loaded."""
    GlossaryLoader(temp_duckdb_path).load_dataframe(sample_df)
    return temp_duckdb_path