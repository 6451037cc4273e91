# ranking_agent.py
import logging
import random
from typing import List, Optional, Sequence

from ingredient_normalizer import normalize_ingredients
from lookup_tables import (
    LOOSE_MATCH_SCORE,
    NORMAL_MATCH_SCORE,
    RULE_LOOSE_MAX_MISSING,
    SURPRISE_FACTOR_RANGE,
)
from match_agent import IngredientMatchAgent
from models import MODE_LOOSE, MODE_NORMAL, MODE_SURPRISE, MODES, Recipe, RecipeMatch, UserPreferences
from substitution_agent import SubstitutionAgent

logger = logging.getLogger(__name__)


def _check_mode(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown match mode {mode!r}; expected one of {', '.join(MODES)}")
    return mode


def _is_degenerate(m: RecipeMatch) -> bool:
    # nothing survived normalization, so there was nothing to match against
    return not m.matched_ingredients and not m.missing_ingredients


def _sort_by_score(matches: Sequence[RecipeMatch]) -> List[RecipeMatch]:
    # sorted() is stable, so ties keep corpus order
    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def perturb_scores(matches: Sequence[RecipeMatch], rng: random.Random) -> List[RecipeMatch]:
    """
    Multiply every score by a factor from [0.7, 1.3) and re-sort.

    Ordering uses the raw perturbed value; the stored score is capped at 1.0.
    """
    low, high = SURPRISE_FACTOR_RANGE
    perturbed = []
    for m in matches:
        raw = m.match_score * (low + rng.random() * (high - low))
        perturbed.append((raw, m.with_score(min(1.0, raw))))
    perturbed.sort(key=lambda pair: pair[0], reverse=True)
    return [m for _, m in perturbed]


def rank_matches(matches: Sequence[RecipeMatch], mode: str, rng: Optional[random.Random] = None) -> List[RecipeMatch]:
    """
    Sort by score (descending) and apply the mode's acceptance rule:
    - normal: score >= 0.6
    - loose: score >= 0.3
    - surprise: random re-scoring, everything kept
    Recipes with no usable ingredients are dropped in every mode.
    """
    _check_mode(mode)
    ranked = _sort_by_score([m for m in matches if not _is_degenerate(m)])

    if mode == MODE_NORMAL:
        return [m for m in ranked if m.match_score >= NORMAL_MATCH_SCORE]
    if mode == MODE_LOOSE:
        return [m for m in ranked if m.match_score >= LOOSE_MATCH_SCORE]
    return perturb_scores(ranked, rng or random.Random())


class ScoreThresholdStrategy:
    """Weighted-score policy: full scoring, then per-mode thresholds."""

    name = "score"

    def __init__(self, match_agent: Optional[IngredientMatchAgent] = None, rng: Optional[random.Random] = None):
        self.match_agent = match_agent or IngredientMatchAgent()
        self.rng = rng

    def rank(self, recipes: Sequence[Recipe], user_ingredients: Sequence[str], mode: str,
             preferences: Optional[UserPreferences] = None) -> List[RecipeMatch]:
        matches = [self.match_agent.calculate_match(r, user_ingredients, preferences) for r in recipes]
        return rank_matches(matches, mode, self.rng)


class RuleBasedStrategy:
    """
    Interpretable policy for small local corpora without rich metadata.

    normal   -> at most `normal_max_missing` missing (exact matches), at least one match
    loose    -> at most 3 missing (substring matches), at least one match
    surprise -> at least one overlapping ingredient, order shuffled

    The reported score is the plain overlap ratio. Preferences are ignored.
    """

    name = "rules"

    def __init__(self, normal_max_missing: int = 0, loose_max_missing: int = RULE_LOOSE_MAX_MISSING,
                 rng: Optional[random.Random] = None,
                 substitution_agent: Optional[SubstitutionAgent] = None):
        if normal_max_missing not in (0, 1):
            raise ValueError("normal_max_missing must be 0 or 1")
        self.normal_max_missing = normal_max_missing
        self.loose_max_missing = loose_max_missing
        self.rng = rng
        self.substitution_agent = substitution_agent or SubstitutionAgent()

    @staticmethod
    def _owns_exact(ingredient: str, owned: Sequence[str]) -> bool:
        return ingredient in owned

    @staticmethod
    def _owns_substring(ingredient: str, owned: Sequence[str]) -> bool:
        return any(ingredient in o or o in ingredient for o in owned)

    def _match(self, recipe: Recipe, owned: List[str], exact: bool) -> RecipeMatch:
        recipe_ingredients = normalize_ingredients(recipe.ingredients)
        owns = self._owns_exact if exact else self._owns_substring
        matched = [i for i in recipe_ingredients if owns(i, owned)]
        missing = [i for i in recipe_ingredients if not owns(i, owned)]
        score = len(matched) / len(recipe_ingredients) if recipe_ingredients else 0.0
        return RecipeMatch(
            recipe=recipe,
            match_score=score,
            matched_ingredients=tuple(matched),
            missing_ingredients=tuple(missing),
            substitution_suggestions=tuple(self.substitution_agent.suggest(missing, owned)),
        )

    def rank(self, recipes: Sequence[Recipe], user_ingredients: Sequence[str], mode: str,
             preferences: Optional[UserPreferences] = None) -> List[RecipeMatch]:
        _check_mode(mode)
        owned = normalize_ingredients(user_ingredients)
        matches = [self._match(r, owned, exact=(mode == MODE_NORMAL)) for r in recipes]
        matches = [m for m in matches if m.matched_ingredients]

        if mode == MODE_NORMAL:
            return _sort_by_score([m for m in matches if len(m.missing_ingredients) <= self.normal_max_missing])
        if mode == MODE_LOOSE:
            return _sort_by_score([m for m in matches if len(m.missing_ingredients) <= self.loose_max_missing])

        (self.rng or random.Random()).shuffle(matches)
        return matches


STRATEGIES = {
    ScoreThresholdStrategy.name: ScoreThresholdStrategy,
    RuleBasedStrategy.name: RuleBasedStrategy,
}


def match(recipes: Sequence[Recipe], user_ingredients: Sequence[str], mode: str = MODE_NORMAL,
          preferences: Optional[UserPreferences] = None, strategy=None,
          rng: Optional[random.Random] = None) -> List[RecipeMatch]:
    """
    Primary entry point: rank a recipe corpus against the user's ingredients.

    `strategy` defaults to the weighted-score policy; pass a RuleBasedStrategy
    (or anything with the same `rank` signature) for the rule-based one.
    `rng` seeds surprise mode for the default strategy. A strategy passed in
    owns its random source, so giving both is a ValueError.
    """
    _check_mode(mode)
    if strategy is not None and rng is not None:
        raise ValueError("pass rng to the strategy itself, not to match()")
    if strategy is None:
        strategy = ScoreThresholdStrategy(rng=rng)
    results = strategy.rank(list(recipes or ()), list(user_ingredients or ()), mode, preferences)
    logger.info("Matched %d recipe(s) in %s mode using %s strategy",
                len(results), mode, getattr(strategy, "name", type(strategy).__name__))
    return results


__all__ = [
    "MODE_NORMAL", "MODE_LOOSE", "MODE_SURPRISE",
    "RuleBasedStrategy", "ScoreThresholdStrategy", "STRATEGIES",
    "match", "perturb_scores", "rank_matches",
]
