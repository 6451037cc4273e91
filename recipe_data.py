# recipe_data.py
"""
Built-in recipe corpus, used when no remote catalog is reachable, plus a
loader for recipe tables kept as JSON / CSV / Excel files.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from models import Recipe, RecipeValidationError

logger = logging.getLogger(__name__)

_STATIC_RECIPES = [
    {
        "id": "1",
        "title": "Chicken Stir Fry",
        "image": "https://images.unsplash.com/photo-1603133872878-684f208fb84b?w=400",
        "ingredients": ["chicken", "onion", "garlic", "bell pepper", "soy sauce"],
        "instructions": [
            "Cut chicken into bite-sized pieces",
            "Chop vegetables",
            "Heat oil in a large pan",
            "Cook chicken until golden",
            "Add vegetables and stir fry",
            "Add soy sauce and serve",
        ],
        "cookTime": 20,
        "cuisine": "Asian",
        "dietary": ["gluten-free"],
        "difficulty": "Easy",
    },
    {
        "id": "2",
        "title": "Pasta Carbonara",
        "image": "https://images.unsplash.com/photo-1621996346565-e3dbc353d2e5?w=400",
        "ingredients": ["pasta", "eggs", "cheese", "garlic", "pepper"],
        "instructions": [
            "Cook pasta according to package",
            "Beat eggs with cheese",
            "Sauté garlic",
            "Combine pasta with egg mixture",
            "Add pepper and serve",
        ],
        "cookTime": 15,
        "cuisine": "Italian",
        "dietary": ["vegetarian"],
        "difficulty": "Medium",
    },
    {
        "id": "3",
        "title": "Simple Salad",
        "image": "https://images.unsplash.com/photo-1512621776951-a57141f2eefd?w=400",
        "ingredients": ["lettuce", "tomato", "cucumber", "olive oil", "salt"],
        "instructions": [
            "Wash and chop vegetables",
            "Combine in a bowl",
            "Drizzle with olive oil",
            "Season with salt and serve",
        ],
        "cookTime": 5,
        "cuisine": "Mediterranean",
        "dietary": ["vegan", "gluten-free"],
        "difficulty": "Easy",
    },
    {
        "id": "4",
        "title": "Scrambled Eggs",
        "image": "https://images.unsplash.com/photo-1482049016688-2d3e1b311543?w=400",
        "ingredients": ["eggs", "butter", "salt", "pepper"],
        "instructions": [
            "Crack eggs into a bowl",
            "Whisk until combined",
            "Heat butter in pan",
            "Pour in eggs and scramble",
            "Season and serve",
        ],
        "cookTime": 10,
        "cuisine": "American",
        "dietary": ["gluten-free"],
        "difficulty": "Easy",
    },
    {
        "id": "5",
        "title": "Rice and Beans",
        "image": "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=400",
        "ingredients": ["rice", "beans", "onion", "garlic", "salt"],
        "instructions": [
            "Cook rice according to package",
            "Sauté onion and garlic",
            "Add beans and heat through",
            "Combine with rice",
            "Season and serve",
        ],
        "cookTime": 25,
        "cuisine": "Mexican",
        "dietary": ["vegan", "gluten-free"],
        "difficulty": "Easy",
    },
    {
        "id": "6",
        "title": "Grilled Cheese Sandwich",
        "image": "https://images.unsplash.com/photo-1528735602781-4a98ef4a30c3?w=400",
        "ingredients": ["bread", "cheese", "butter"],
        "instructions": [
            "Butter one side of each bread slice",
            "Place cheese between bread slices",
            "Heat pan over medium heat",
            "Cook until golden brown on both sides",
            "Serve hot",
        ],
        "cookTime": 8,
        "cuisine": "American",
        "dietary": ["vegetarian"],
        "difficulty": "Easy",
    },
    {
        "id": "7",
        "title": "Tomato Soup",
        "image": "https://images.unsplash.com/photo-1547592166-23ac45744acd?w=400",
        "ingredients": ["tomato", "onion", "garlic", "olive oil", "salt", "pepper"],
        "instructions": [
            "Chop tomatoes and onion",
            "Sauté onion and garlic in olive oil",
            "Add tomatoes and cook until soft",
            "Blend until smooth",
            "Season with salt and pepper",
        ],
        "cookTime": 30,
        "cuisine": "Mediterranean",
        "dietary": ["vegan", "gluten-free"],
        "difficulty": "Easy",
    },
    {
        "id": "8",
        "title": "Pancakes",
        "image": "https://images.unsplash.com/photo-1567620905732-2d1ec7ab7445?w=400",
        "ingredients": ["flour", "eggs", "milk", "butter", "sugar", "salt"],
        "instructions": [
            "Mix dry ingredients in a bowl",
            "Whisk wet ingredients separately",
            "Combine wet and dry ingredients",
            "Heat pan with butter",
            "Pour batter and cook until bubbles form",
            "Flip and cook other side",
        ],
        "cookTime": 20,
        "cuisine": "American",
        "dietary": ["vegetarian"],
        "difficulty": "Easy",
    },
]

STATIC_RECIPES = tuple(Recipe.from_dict(r) for r in _STATIC_RECIPES)


def get_static_recipes() -> List[Recipe]:
    return list(STATIC_RECIPES)


def get_recipe_by_id(recipe_id: str, recipes: Sequence[Recipe] = STATIC_RECIPES) -> Optional[Recipe]:
    return next((r for r in recipes if r.recipe_id == str(recipe_id)), None)


def filter_recipes_by_cuisine(recipes: Sequence[Recipe], cuisine: str) -> List[Recipe]:
    if cuisine == "all":
        return list(recipes)
    return [r for r in recipes if r.cuisine == cuisine]


def filter_recipes_by_dietary(recipes: Sequence[Recipe], dietary: str) -> List[Recipe]:
    if dietary == "all":
        return list(recipes)
    return [r for r in recipes if dietary in r.dietary]


# ---------------------------------------------------------------------------
# Tabular corpora
# ---------------------------------------------------------------------------
_LIST_COLUMNS = ("ingredients", "instructions", "dietary")


def _parse_list_cell(value):
    """List cells may hold a real list, a JSON array, or a ';'-separated string."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    text = str(value).strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(v) for v in parsed]
    return [part.strip() for part in text.split(";") if part.strip()]


def _read_table(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return pd.read_json(path, orient="records", dtype=False)
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix in (".xlsx", ".xls"):
        return pd.read_excel(path, dtype=str).fillna("")
    raise ValueError(f"Unsupported recipe file type: {path.suffix}")


def load_recipes_from_file(path) -> List[Recipe]:
    """
    Load a recipe table and validate every row into a Recipe.

    Rows that fail validation are skipped with a warning; a missing file
    gives an empty list.
    """
    p = Path(path)
    if not p.exists():
        logger.warning("Recipe file %s not found", p)
        return []

    df = _read_table(p)
    recipes: List[Recipe] = []
    for idx, row in enumerate(df.to_dict(orient="records")):
        raw = {k: (None if isinstance(v, float) and pd.isna(v) else v) for k, v in row.items()}
        for col in _LIST_COLUMNS:
            if col in raw:
                raw[col] = _parse_list_cell(raw[col])
        if raw.get("id") in (None, ""):
            raw["id"] = str(idx + 1)
        try:
            recipes.append(Recipe.from_dict(raw))
        except RecipeValidationError as e:
            logger.warning("Skipping row %d of %s: %s", idx, p.name, e)
    logger.info("Loaded %d recipe(s) from %s", len(recipes), p)
    return recipes
