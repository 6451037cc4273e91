# preference_agent.py
import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from ingredient_normalizer import normalize_ingredient, normalize_ingredients
from lookup_tables import DIETARY_RESTRICTIONS, PLANT_BASED_ITEMS
from models import Recipe, UserPreferences

logger = logging.getLogger(__name__)


def _stem(word: str) -> str:
    if word.endswith("s") and len(word) > 3:
        return word[:-1]
    return word


def _contains_term(ingredient: str, term: str) -> bool:
    words = [_stem(w) for w in ingredient.split()]
    target = [_stem(w) for w in term.split()]
    n = len(target)
    return any(words[i:i + n] == target for i in range(len(words) - n + 1))


class DietaryFilterAgent:
    """
    Drops recipes that conflict with the user's dietary restrictions or
    contain something they dislike.

    A recipe tagged with a restriction (e.g. "vegan") is trusted; an untagged
    one is checked against the restriction's forbidden foods.
    """

    def __init__(self, restrictions=DIETARY_RESTRICTIONS):
        self.restrictions = restrictions

        # Canonical mapping for common restriction labels
        self.canonical_map = {
            "gluten free": "gluten-free",
            "gluten-free": "gluten-free",
            "celiac": "gluten-free",
            "celiac disease": "gluten-free",
            "dairy free": "dairy-free",
            "dairy-free": "dairy-free",
            "lactose intolerant": "dairy-free",
            "vegan": "vegan",
            "strict vegan": "vegan",
            "vegetarian": "vegetarian",
            "ketogenic": "keto",
            "keto": "keto",
            "paleo": "paleo",
        }

    @staticmethod
    def is_plant_based(ingredient: str) -> bool:
        # "creamy peanut butter" is not forbidden by "butter"
        return any(_contains_term(ingredient, item) for item in PLANT_BASED_ITEMS)

    def _normalise_restrictions(self, restrictions: Iterable[str]) -> set:
        tags = set()
        for r in restrictions:
            r_lower = r.strip().lower()
            if r_lower:
                tags.add(self.canonical_map.get(r_lower, r_lower))
        return tags

    def violations(self, recipe: Recipe, restrictions: Iterable[str]) -> List[str]:
        """Forbidden ingredients found in the recipe, as 'restriction: ingredient'."""
        ingredients = [i for i in normalize_ingredients(recipe.ingredients) if not self.is_plant_based(i)]
        recipe_tags = self._normalise_restrictions(recipe.dietary)
        found = []
        for tag in sorted(self._normalise_restrictions(restrictions)):
            rule = self.restrictions.get(tag)
            if rule is None or tag in recipe_tags:
                continue
            for ingredient in ingredients:
                if any(_contains_term(ingredient, term) for term in rule["forbidden"]):
                    found.append(f"{tag}: {ingredient}")
        return found

    def contains_disliked(self, recipe: Recipe, disliked: Iterable[str]) -> bool:
        terms = normalize_ingredients(disliked)
        return any(
            _contains_term(ingredient, term)
            for ingredient in normalize_ingredients(recipe.ingredients)
            for term in terms
        )

    def filter_recipes(self, recipes: Sequence[Recipe], preferences: Optional[UserPreferences]) -> List[Recipe]:
        if preferences is None:
            return list(recipes)
        kept = []
        for recipe in recipes:
            problems = self.violations(recipe, preferences.dietary)
            if problems:
                logger.debug("Dropping %r: %s", recipe.title, ", ".join(problems))
                continue
            if self.contains_disliked(recipe, preferences.disliked_ingredients):
                logger.debug("Dropping %r: contains a disliked ingredient", recipe.title)
                continue
            kept.append(recipe)
        return kept


def build_preference_profile(history: Sequence[Recipe]) -> UserPreferences:
    """Infer preferences from recipes the user cooked or saved."""
    cuisines = Counter(r.cuisine for r in history)
    difficulties = Counter(r.difficulty for r in history)
    ingredients = Counter()
    for recipe in history:
        for raw in recipe.ingredients:
            normalized = normalize_ingredient(raw)
            if normalized:
                ingredients[normalized] += 1

    cook_times = [r.cook_time for r in history]
    avg_cook_time = round(sum(cook_times) / len(cook_times)) if cook_times else 30

    return UserPreferences(
        cuisines=[c for c, _ in cuisines.most_common(3)],
        difficulties=[d for d, _ in difficulties.most_common(2)],
        max_cook_time=avg_cook_time,
        favorite_ingredients=[i for i, _ in ingredients.most_common(10)],
    )


def combine_preferences(implicit: UserPreferences, explicit: UserPreferences) -> UserPreferences:
    """Merge inferred and stated preferences; stated dietary/dislikes/spice win."""
    cook_times = [t for t in (implicit.max_cook_time, explicit.max_cook_time) if t is not None]
    return UserPreferences(
        cuisines=implicit.cuisines | explicit.cuisines,
        dietary=explicit.dietary,
        difficulties=implicit.difficulties | explicit.difficulties,
        max_cook_time=min(cook_times) if cook_times else None,
        favorite_ingredients=implicit.favorite_ingredients | explicit.favorite_ingredients,
        spice_level=explicit.spice_level,
        disliked_ingredients=explicit.disliked_ingredients,
    )
