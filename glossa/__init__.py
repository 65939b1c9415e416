# Glossa
# =======
"""
Glossary search: query parsing, fuzzy term lookup and filter resolution
over pluggable storage.
"""

__version__ = "1.0.0"
