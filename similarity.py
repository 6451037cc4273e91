# similarity.py
from typing import Iterable

from rapidfuzz.distance import Levenshtein

from lookup_tables import SIMILARITY_THRESHOLD


def word_similarity(word1: str, word2: str) -> float:
    """(max_len - levenshtein) / max_len, 1.0 when both words are empty."""
    return Levenshtein.normalized_similarity(word1, word2)


def ingredient_similarity(ingredient1: str, ingredient2: str) -> float:
    """
    Closeness in [0, 1] of two normalized ingredient strings.

    Compares every word of one against every word of the other and keeps the
    best pair, so "red onion" vs "onion powder" scores 1.0 on "onion".
    """
    words1 = ingredient1.split()
    words2 = ingredient2.split()
    if not words1 or not words2:
        return 1.0 if not words1 and not words2 else 0.0

    best = 0.0
    for w1 in words1:
        for w2 in words2:
            best = max(best, word_similarity(w1, w2))
            if best == 1.0:
                return best
    return best


def is_similar(ingredient1: str, ingredient2: str, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    return ingredient_similarity(ingredient1, ingredient2) > threshold


def matches_any(ingredient: str, candidates: Iterable[str], threshold: float = SIMILARITY_THRESHOLD) -> bool:
    return any(is_similar(ingredient, c, threshold) for c in candidates)
