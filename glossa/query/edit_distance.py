# Glossa Query - Edit Distance
# =============================
"""
Levenshtein edit distance used for fuzzy term matching.

Substitution, insertion and deletion each cost 1. Comparison is
case-sensitive.
"""

LEVENSHTEIN_DISTANCE = 3


def levenshtein(a: str, b: str) -> int:
    """
    Compute the edit distance between two strings.

    Args:
        a: Source string
        b: Target string

    Returns:
        Minimum number of single-character edits turning a into b
    """
    n = len(a)
    m = len(b)
    if n == 0:
        return m
    if m == 0:
        return n

    # Only the previous row of the matrix is needed
    previous = list(range(m + 1))

    for i in range(1, n + 1):
        current = [i] + [0] * m
        a_i = a[i - 1]

        for j in range(1, m + 1):
            cost = 0 if a_i == b[j - 1] else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            )

        previous = current

    return previous[m]


def within_distance(a: str, b: str, max_distance: int = LEVENSHTEIN_DISTANCE) -> bool:
    """True when a and b are at most max_distance edits apart."""
    return levenshtein(a, b) <= max_distance
