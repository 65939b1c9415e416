# Glossa - Configuration
# =======================
"""
Runtime settings read from environment variables.

Environment:
    GLOSSA_DB_PATH            DuckDB glossary file (default data/glossary.duckdb)
    GLOSSA_MAX_EDIT_DISTANCE  Fuzzy term threshold (default 3)
    GLOSSA_TERM_MATCH         "fuzzy" (default) or "substring"
    GLOSSA_CORS_ORIGINS       Comma separated origins for the HTTP API
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List

from glossa.models import TermMatchMode
from glossa.query.edit_distance import LEVENSHTEIN_DISTANCE

logger = logging.getLogger(__name__)


DEFAULT_DB_PATH = "data/glossary.duckdb"


@dataclass
class GlossaSettings:
    """Settings for the query service and its adapters."""
    db_path: str = DEFAULT_DB_PATH
    max_edit_distance: int = LEVENSHTEIN_DISTANCE
    term_match: TermMatchMode = TermMatchMode.FUZZY
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost"])

    @classmethod
    def from_env(cls) -> 'GlossaSettings':
        """Build settings from the environment, falling back to defaults."""
        settings = cls()
        settings.db_path = os.getenv("GLOSSA_DB_PATH", DEFAULT_DB_PATH)

        raw_distance = os.getenv("GLOSSA_MAX_EDIT_DISTANCE")
        if raw_distance:
            try:
                distance = int(raw_distance)
                if distance < 0:
                    raise ValueError("negative distance")
                settings.max_edit_distance = distance
            except ValueError:
                logger.warning(
                    f"Invalid GLOSSA_MAX_EDIT_DISTANCE={raw_distance!r}, "
                    f"using {LEVENSHTEIN_DISTANCE}"
                )

        raw_mode = os.getenv("GLOSSA_TERM_MATCH")
        if raw_mode:
            try:
                settings.term_match = TermMatchMode(raw_mode.strip().lower())
            except ValueError:
                logger.warning(f"Invalid GLOSSA_TERM_MATCH={raw_mode!r}, using fuzzy")

        raw_origins = os.getenv("GLOSSA_CORS_ORIGINS")
        if raw_origins:
            settings.cors_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

        return settings
