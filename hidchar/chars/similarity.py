"""Edit-distance similarity between two texts."""

from __future__ import annotations


def levenshtein(a: str, b: str) -> int:
    """Return the Levenshtein distance between ``a`` and ``b``.

    Single-character insertions, deletions and substitutions each cost 1.
    Uses two rolling rows, so memory is O(min(len(a), len(b))).
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return how close two texts are, as a percentage in [0, 100].

    Two empty strings are identical (100). Otherwise the score is
    ``100 * (max_len - distance) / max_len`` rounded to two decimals.

    Examples:
        >>> similarity("", "")
        100.0
        >>> similarity("abc", "abd")
        66.67
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    distance = levenshtein(a, b)
    return round(100 * (max_len - distance) / max_len, 2)


def format_similarity(score: float) -> str:
    """Format a score for display (e.g., ``"66.67%"``)."""
    return f"{score:.2f}%"
