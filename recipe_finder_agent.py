# recipe_finder_agent.py

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from api_agent import RecipeCatalogAgent
from image_agent import ImageSearchAgent
from match_agent import IngredientMatchAgent
from models import MODE_SURPRISE, Recipe, RecipeMatch, UserPreferences
from preference_agent import DietaryFilterAgent
from ranking_agent import ScoreThresholdStrategy, match
from recipe_generator_agent import RecipeGeneratorAgent
from settings import Settings

logger = logging.getLogger(__name__)


class FinderResult:
    def __init__(self, matches: List[RecipeMatch], generated_recipe: Optional[Recipe] = None):
        self.matches = matches
        self.generated_recipe = generated_recipe

    @property
    def recipes(self) -> List[Recipe]:
        return [m.recipe for m in self.matches]

    def __repr__(self) -> str:
        return f"FinderResult(matches={len(self.matches)}, generated={self.generated_recipe is not None})"


class RecipeFinderAgent:
    """
    Orchestration layer for one "what can I cook?" request:

    1. fetch the corpus (remote catalog, falling back to the static one)
    2. drop recipes that break dietary restrictions / dislikes
    3. match and rank in the requested mode
    4. surprise mode: ask the generator for a new recipe when nothing matched
    5. fill in missing images
    """

    def __init__(
        self,
        catalog_agent: Optional[RecipeCatalogAgent] = None,
        generator_agent: Optional[RecipeGeneratorAgent] = None,
        image_agent: Optional[ImageSearchAgent] = None,
        dietary_agent: Optional[DietaryFilterAgent] = None,
        match_agent: Optional[IngredientMatchAgent] = None,
    ):
        self.catalog_agent = catalog_agent or RecipeCatalogAgent()
        self.image_agent = image_agent or ImageSearchAgent()
        self.generator_agent = generator_agent or RecipeGeneratorAgent(image_agent=self.image_agent)
        self.dietary_agent = dietary_agent or DietaryFilterAgent()
        self.match_agent = match_agent or IngredientMatchAgent()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RecipeFinderAgent":
        settings = settings or Settings.load()
        image_agent = ImageSearchAgent.from_settings(settings)
        return cls(
            catalog_agent=RecipeCatalogAgent.from_settings(settings),
            generator_agent=RecipeGeneratorAgent.from_settings(settings, image_agent=image_agent),
            image_agent=image_agent,
        )

    def _generated_match(self, recipe: Recipe, ingredients: Sequence[str]) -> RecipeMatch:
        # Made for these ingredients, so it ranks first regardless of overlap
        return self.match_agent.calculate_match(recipe, ingredients).with_score(1.0)

    def _fill_images(self, matches: List[RecipeMatch]) -> List[RecipeMatch]:
        needing = [m.recipe for m in matches if not m.recipe.image]
        if not needing:
            return matches
        images = self.image_agent.search_recipe_images(needing)
        return [
            replace(m, recipe=m.recipe.with_image(images[m.recipe.recipe_id]))
            if not m.recipe.image and m.recipe.recipe_id in images else m
            for m in matches
        ]

    def find_recipes(
        self,
        ingredients: Sequence[str],
        mode: str,
        preferences: Optional[UserPreferences] = None,
        strategy=None,
        corpus: Optional[Sequence[Recipe]] = None,
        always_generate: bool = False,
        rng=None,
    ) -> FinderResult:
        ingredients = [i.strip().lower() for i in ingredients if i and i.strip()]

        # 1. Corpus
        recipes = list(corpus) if corpus is not None else self.catalog_agent.fetch_recipes(ingredients, mode)
        logger.info("Candidate recipes: %d", len(recipes))

        # 2. Dietary restrictions and dislikes
        recipes = self.dietary_agent.filter_recipes(recipes, preferences)
        logger.info("Compliant recipes: %d", len(recipes))

        # 3. Match + rank
        if strategy is not None and rng is not None:
            raise ValueError("pass rng to the strategy itself, not to find_recipes()")
        if strategy is None:
            strategy = ScoreThresholdStrategy(match_agent=self.match_agent, rng=rng)
        matches = match(recipes, ingredients, mode, preferences, strategy=strategy)

        # 4. Generative fallback
        generated = None
        if mode == MODE_SURPRISE and (always_generate or not matches):
            generated = self.generator_agent.generate_recipe(
                ingredients,
                cuisines=sorted(preferences.cuisines) if preferences else None,
                dietary=sorted(preferences.dietary) if preferences else None,
            )
            if generated is not None:
                matches = [self._generated_match(generated, ingredients)] + matches

        # 5. Images
        matches = self._fill_images(matches)
        if generated is not None:
            generated = matches[0].recipe

        return FinderResult(matches=matches, generated_recipe=generated)
