# ingredient_normalizer.py
import re
from typing import Iterable, List

from lookup_tables import CONNECTOR_WORDS, PREPARATION_WORDS, UNITS

# "2 cups", "1/2 tsp", "500g", "1-2 lb.", or a bare number ("1 onion")
_QUANTITY_RE = re.compile(
    r"(?<![\w.])(?:\d+(?:[./]\d+)?|[½¼¾⅓⅔⅛])"
    r"(?:\s*-\s*\d+(?:[./]\d+)?)?"
    r"\s*(?:(?:" + "|".join(UNITS) + r")s?\.?)?"
    r"(?!\w)"
)
_PUNCTUATION_RE = re.compile(r"[^\w\s'-]")


def normalize_ingredient(raw: str) -> str:
    """
    Best-effort lexical cleanup of one free-text ingredient:
    "2 cups chopped fresh basil" -> "basil".

    Lower-cases, strips quantity+unit pairs, connector words and preparation
    adjectives. Returns "" when nothing is left. Idempotent.
    """
    if not raw:
        return ""
    text = raw.lower()
    text = _QUANTITY_RE.sub(" ", text)
    text = _PUNCTUATION_RE.sub(" ", text)

    words = []
    for token in text.split():
        token = token.strip("-'")
        if not token or token in CONNECTOR_WORDS or token in PREPARATION_WORDS:
            continue
        words.append(token)
    return " ".join(words)


def normalize_ingredients(ingredients: Iterable[str]) -> List[str]:
    """Normalize every entry, dropping the ones that end up empty."""
    out = []
    for ingredient in ingredients or ():
        normalized = normalize_ingredient(ingredient)
        if normalized:
            out.append(normalized)
    return out
