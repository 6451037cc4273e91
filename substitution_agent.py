# substitution_agent.py
import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from lookup_tables import SIMILARITY_THRESHOLD, SUBSTITUTIONS
from similarity import is_similar, matches_any

logger = logging.getLogger(__name__)


class SubstitutionAgent:
    """
    Proposes a replacement the user already owns for an ingredient they lack,
    using a curated substitution table.
    """

    def __init__(self, substitutions: Mapping[str, Sequence[str]] = SUBSTITUTIONS,
                 threshold: float = SIMILARITY_THRESHOLD):
        self.substitutions = substitutions
        self.threshold = threshold

    def find_substitution(self, missing_ingredient: str, user_ingredients: Sequence[str]) -> Optional[str]:
        """
        First-match-wins: the first table key similar to the missing
        ingredient, then the first of its candidates the user owns something
        similar to. Both inputs are expected to be normalized already.
        """
        for original, candidates in self.substitutions.items():
            if not is_similar(missing_ingredient, original, self.threshold):
                continue
            for candidate in candidates:
                if matches_any(candidate, user_ingredients, self.threshold):
                    logger.debug("Substitute for %r: %r (via %r)", missing_ingredient, candidate, original)
                    return candidate
        return None

    @staticmethod
    def format_suggestion(substitute: str, missing_ingredient: str) -> str:
        return f"Use {substitute} instead of {missing_ingredient}"

    def suggest(self, missing_ingredients: Iterable[str], user_ingredients: Sequence[str]) -> List[str]:
        suggestions = []
        for missing in missing_ingredients:
            substitute = self.find_substitution(missing, user_ingredients)
            if substitute:
                suggestions.append(self.format_suggestion(substitute, missing))
        return suggestions
