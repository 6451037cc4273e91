# api_agent.py

import logging
from typing import List, Optional, Sequence

import requests

from models import MODE_LOOSE, MODE_NORMAL, Recipe, RecipeValidationError, parse_cook_time
from recipe_data import get_static_recipes

logger = logging.getLogger(__name__)


class APIDataError(Exception):
    pass


def difficulty_from_ready_time(minutes: int) -> str:
    if minutes <= 15:
        return "Easy"
    if minutes <= 45:
        return "Medium"
    return "Hard"


class RecipeCatalogAgent:
    """
    Supplies the recipe corpus from:
    - Spoonacular (primary; needs SPOONACULAR_API_KEY)
    - TheMealDB (free fallback, no key)
    - the built-in static corpus (last resort, always available)

    Every remote record is validated into a Recipe here so nothing
    downstream sees partially-shaped data.
    """

    def __init__(self, spoonacular_key: Optional[str] = None, use_mealdb_fallback: bool = True,
                 max_results: int = 20, timeout: float = 10):
        # Base URLs
        self.spoonacular_base = "https://api.spoonacular.com"
        self.mealdb_base = "https://www.themealdb.com/api/json/v1/1"

        self.spoonacular_key = spoonacular_key
        self.use_mealdb_fallback = use_mealdb_fallback
        self.max_results = max_results
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "RecipeCatalogAgent":
        return cls(
            spoonacular_key=settings.spoonacular_api_key,
            use_mealdb_fallback=settings.use_mealdb_fallback,
            max_results=settings.max_recipe_results,
            timeout=settings.request_timeout,
        )

    def _get_json(self, url: str, params: Optional[dict] = None):
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            logger.info("GET %s -> %s", url, resp.status_code)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise APIDataError(f"Request to {url} failed: {e}") from e

    # ------------------------------------------------------------------
    # Spoonacular (primary source)
    # ------------------------------------------------------------------
    def _fetch_from_spoonacular(self, ingredients: Sequence[str], mode: str) -> List[Recipe]:
        """
        findByIngredients for candidate ids, then the information endpoint
        for each candidate's full record.
        """
        ranking = 1 if mode == MODE_NORMAL else 2 if mode == MODE_LOOSE else 3
        params = {
            "ingredients": ",".join(ingredients),
            "ranking": ranking,
            "ignorePantry": "true" if mode == MODE_NORMAL else "false",
            "number": self.max_results,
            "apiKey": self.spoonacular_key,
        }
        found = self._get_json(f"{self.spoonacular_base}/recipes/findByIngredients", params)
        if not isinstance(found, list):
            msg = (found.get("message") or "") if isinstance(found, dict) else ""
            raise APIDataError(f"Unexpected Spoonacular response: {msg or type(found).__name__}")

        recipes: List[Recipe] = []
        for item in found:
            rid = item.get("id") if isinstance(item, dict) else None
            if rid is None:
                continue
            try:
                detail = self._get_json(
                    f"{self.spoonacular_base}/recipes/{rid}/information",
                    {"apiKey": self.spoonacular_key},
                )
                if not isinstance(detail, dict):
                    raise APIDataError(f"Unexpected Spoonacular detail for {rid}: {type(detail).__name__}")
                recipes.append(self._normalise_spoonacular(detail))
            except (APIDataError, ValueError, TypeError, AttributeError) as e:
                # RecipeValidationError is a ValueError; the rest are odd nested shapes
                logger.warning("Skipping Spoonacular recipe %s: %s", rid, e)
        return recipes

    @staticmethod
    def _normalise_spoonacular(raw: dict) -> Recipe:
        ingredients = []
        for ing in raw.get("extendedIngredients") or []:
            name = ing.get("original") or ing.get("nameClean") or ing.get("name")
            if name:
                ingredients.append(name)

        instructions = []
        for block in raw.get("analyzedInstructions") or []:
            for step in block.get("steps") or []:
                if step.get("step"):
                    instructions.append(step["step"])

        try:
            ready = parse_cook_time(raw.get("readyInMinutes") or 30)
        except RecipeValidationError:
            ready = 30
        cuisines = raw.get("cuisines") or []
        return Recipe.from_dict(
            {
                "id": raw.get("id"),
                "title": raw.get("title"),
                "image": raw.get("image") or "",
                "ingredients": ingredients,
                "instructions": instructions,
                "cookTime": ready,
                "cuisine": cuisines[0] if cuisines else "International",
                "dietary": raw.get("diets") or [],
                "difficulty": difficulty_from_ready_time(ready),
            }
        )

    # ------------------------------------------------------------------
    # TheMealDB (free fallback)
    # ------------------------------------------------------------------
    def _fetch_from_mealdb(self, query: Optional[str]) -> List[Recipe]:
        if query:
            data = self._get_json(f"{self.mealdb_base}/search.php", {"s": query})
        else:
            data = self._get_json(f"{self.mealdb_base}/random.php")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise APIDataError(f"Unexpected TheMealDB response: {type(data).__name__}")
        meals = data.get("meals") or []
        if not isinstance(meals, list):
            raise APIDataError(f"Unexpected TheMealDB meals: {type(meals).__name__}")

        recipes = []
        for meal in meals:
            if not isinstance(meal, dict):
                logger.warning("Skipping MealDB entry of type %s", type(meal).__name__)
                continue
            try:
                recipes.append(self._normalise_mealdb(meal))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning("Skipping MealDB meal %s: %s", meal.get("idMeal"), e)
        return recipes

    @staticmethod
    def _normalise_mealdb(meal: dict) -> Recipe:
        ingredients = []
        for i in range(1, 21):
            ingredient = (meal.get(f"strIngredient{i}") or "").strip()
            measure = (meal.get(f"strMeasure{i}") or "").strip()
            if ingredient:
                ingredients.append(f"{measure} {ingredient}" if measure else ingredient)

        text = meal.get("strInstructions") or ""
        instructions = [line.strip() for line in text.split("\n") if line.strip()]

        return Recipe.from_dict(
            {
                "id": meal.get("idMeal"),
                "title": meal.get("strMeal"),
                "image": meal.get("strMealThumb") or "",
                "ingredients": ingredients,
                "instructions": instructions,
                "cookTime": 30,  # not provided by TheMealDB
                "cuisine": meal.get("strArea") or "International",
                "dietary": [],
                "difficulty": "Medium",
            }
        )

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def fetch_recipes(self, ingredients: Sequence[str], mode: str = MODE_NORMAL) -> List[Recipe]:
        """
        Return candidate recipes for the given ingredients. Never raises:
        each failing source falls through to the next one, ending at the
        static corpus.
        """
        ingredients = [i for i in ingredients if i]

        if self.spoonacular_key:
            try:
                recipes = self._fetch_from_spoonacular(ingredients, mode)
                if recipes:
                    return recipes
                logger.info("Spoonacular returned no recipes")
            except APIDataError as e:
                logger.warning("%s", e)

        if self.use_mealdb_fallback:
            try:
                # MealDB search is by dish name; the first ingredient is the best single hint
                recipes = self._fetch_from_mealdb(ingredients[0] if ingredients else None)
                if recipes:
                    return recipes
                logger.info("TheMealDB returned no recipes")
            except APIDataError as e:
                logger.warning("%s", e)

        logger.info("Using static recipe corpus")
        return get_static_recipes()
