# Glossa API
# ===========
"""HTTP access to glossary search."""
