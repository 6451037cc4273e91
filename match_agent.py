# match_agent.py
import logging
from typing import List, Mapping, Optional, Sequence

from ingredient_normalizer import normalize_ingredients
from lookup_tables import (
    CUISINE_INGREDIENTS,
    INGREDIENT_COMPATIBILITY,
    PREFERENCE_POINTS,
    SCORE_WEIGHTS,
    SIMILARITY_THRESHOLD,
    SUBSTITUTION_CREDIT,
)
from models import Recipe, RecipeMatch, UserPreferences
from similarity import matches_any
from substitution_agent import SubstitutionAgent

logger = logging.getLogger(__name__)


def _casefold_set(values) -> set:
    return {v.casefold() for v in values if v}


class IngredientMatchAgent:
    """
    Scores one recipe against the user's ingredients.

    The composite score is the ingredient overlap ratio plus weighted bonuses:
    - compatibility: share of matched ingredient pairs that are known to go well together
    - substitution: credit for missing ingredients the user can substitute
    - preference: cuisine / dietary / difficulty / cook time / favorites alignment
    - cuisine: share of matched ingredients typical of the recipe's cuisine
    capped at 1.0.

    Pure computation: never raises for any recipe or ingredient list.
    """

    def __init__(
        self,
        substitution_agent: Optional[SubstitutionAgent] = None,
        compatibility: Mapping[str, Sequence[str]] = INGREDIENT_COMPATIBILITY,
        cuisine_ingredients: Mapping[str, Sequence[str]] = CUISINE_INGREDIENTS,
        weights: Mapping[str, float] = SCORE_WEIGHTS,
        threshold: float = SIMILARITY_THRESHOLD,
    ):
        self.substitution_agent = substitution_agent or SubstitutionAgent(threshold=threshold)
        self.compatibility = compatibility
        self.cuisine_ingredients = cuisine_ingredients
        self.weights = weights
        self.threshold = threshold

    # ------------------------------------------------------------------
    # Bonus terms
    # ------------------------------------------------------------------
    def compatibility_bonus(self, matched: Sequence[str]) -> float:
        points = 0
        pairs = 0
        for i in range(len(matched)):
            for j in range(i + 1, len(matched)):
                a, b = matched[i], matched[j]
                if b in self.compatibility.get(a, ()) or a in self.compatibility.get(b, ()):
                    points += 1
                pairs += 1
        return points / pairs if pairs else 0.0

    def substitution_bonus(self, missing: Sequence[str], user_ingredients: Sequence[str]) -> float:
        """Average credit over the missing ingredients that do have a substitute."""
        credit = 0.0
        substituted = 0
        for ingredient in missing:
            if self.substitution_agent.find_substitution(ingredient, user_ingredients):
                credit += SUBSTITUTION_CREDIT
                substituted += 1
        return credit / substituted if substituted else 0.0

    def preference_bonus(self, recipe: Recipe, recipe_ingredients: Sequence[str],
                         preferences: Optional[UserPreferences]) -> float:
        if preferences is None:
            return 0.0

        bonus = 0.0
        if recipe.cuisine.casefold() in _casefold_set(preferences.cuisines):
            bonus += PREFERENCE_POINTS["cuisine"]
        if _casefold_set(recipe.dietary) & _casefold_set(preferences.dietary):
            bonus += PREFERENCE_POINTS["dietary"]
        if recipe.difficulty.casefold() in _casefold_set(preferences.difficulties):
            bonus += PREFERENCE_POINTS["difficulty"]
        if preferences.max_cook_time is not None and recipe.cook_time <= preferences.max_cook_time:
            bonus += PREFERENCE_POINTS["cook_time"]

        favorites = normalize_ingredients(sorted(preferences.favorite_ingredients))
        if favorites:
            found = sum(1 for fav in favorites if matches_any(fav, recipe_ingredients, self.threshold))
            bonus += (found / len(favorites)) * PREFERENCE_POINTS["favorites"]
        return bonus

    def cuisine_bonus(self, recipe: Recipe, matched: Sequence[str]) -> float:
        typical = self.cuisine_ingredients.get(recipe.cuisine.casefold(), ())
        if not typical or not matched:
            return 0.0
        hits = [m for m in matched if matches_any(m, typical, self.threshold)]
        return len(hits) / len(matched)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def calculate_match(
        self,
        recipe: Recipe,
        user_ingredients: Sequence[str],
        preferences: Optional[UserPreferences] = None,
    ) -> RecipeMatch:
        recipe_ingredients = normalize_ingredients(recipe.ingredients)
        owned = normalize_ingredients(user_ingredients)

        matched: List[str] = []
        missing: List[str] = []
        for ingredient in recipe_ingredients:
            if matches_any(ingredient, owned, self.threshold):
                matched.append(ingredient)
            else:
                missing.append(ingredient)

        if not recipe_ingredients:
            return RecipeMatch(recipe=recipe, match_score=0.0, breakdown={"base": 0.0})

        parts = {
            "base": len(matched) / len(recipe_ingredients),
            "compatibility": self.compatibility_bonus(matched),
            "substitution": self.substitution_bonus(missing, owned),
            "preference": self.preference_bonus(recipe, recipe_ingredients, preferences),
            "cuisine": self.cuisine_bonus(recipe, matched),
        }
        score = parts["base"] + sum(self.weights[k] * parts[k] for k in self.weights)
        score = max(0.0, min(1.0, score))

        logger.debug("Scored %r: %.3f %s", recipe.title, score, parts)

        return RecipeMatch(
            recipe=recipe,
            match_score=score,
            matched_ingredients=tuple(matched),
            missing_ingredients=tuple(missing),
            substitution_suggestions=tuple(self.substitution_agent.suggest(missing, owned)),
            breakdown=parts,
        )
