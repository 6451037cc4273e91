# models.py
import numbers
import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Set, Tuple

MODE_NORMAL = "normal"
MODE_LOOSE = "loose"
MODE_SURPRISE = "surprise"
MODES = (MODE_NORMAL, MODE_LOOSE, MODE_SURPRISE)

DIFFICULTIES = ("Easy", "Medium", "Hard")


class RecipeValidationError(ValueError):
    """Raised when a raw recipe record is missing fields or has the wrong shape."""


def _string_tuple(values, field_name: str) -> Tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple, set, frozenset)):
        raise RecipeValidationError(f"'{field_name}' must be a list of strings")
    out = []
    for v in values:
        if not isinstance(v, str):
            raise RecipeValidationError(f"'{field_name}' must only contain strings")
        v = v.strip()
        if v and v not in out:
            out.append(v)
    return tuple(out)


def parse_cook_time(value) -> int:
    # generated recipes sometimes send "30" or "30 minutes" instead of 30
    if isinstance(value, bool):
        raise RecipeValidationError("'cookTime' must be a positive number of minutes")
    if isinstance(value, numbers.Real):
        minutes = int(round(value))
    elif isinstance(value, str):
        m = re.search(r"\d+", value)
        if not m:
            raise RecipeValidationError(f"'cookTime' is not a number: {value!r}")
        minutes = int(m.group(0))
    else:
        raise RecipeValidationError("'cookTime' must be a positive number of minutes")
    if minutes <= 0:
        raise RecipeValidationError("'cookTime' must be positive")
    return minutes


def _parse_difficulty(value) -> str:
    if not isinstance(value, str):
        raise RecipeValidationError("'difficulty' must be a string")
    label = value.strip().capitalize()
    if label not in DIFFICULTIES:
        raise RecipeValidationError(f"Unknown difficulty {value!r}")
    return label


@dataclass(frozen=True)
class Recipe:
    recipe_id: str
    title: str
    image: str = ""
    ingredients: Tuple[str, ...] = ()
    instructions: Tuple[str, ...] = ()
    cook_time: int = 30
    cuisine: str = "International"
    dietary: Tuple[str, ...] = ()
    difficulty: str = "Medium"

    @property
    def id(self) -> str:
        return self.recipe_id

    @classmethod
    def from_dict(cls, raw: dict, recipe_id: Optional[str] = None, image: Optional[str] = None) -> "Recipe":
        """
        Validate a loosely-shaped recipe record (catalog row, parsed AI JSON)
        and build a Recipe from it.

        Accepts both camelCase ("cookTime") and snake_case ("cook_time") keys.
        Raises RecipeValidationError when a required field is missing or malformed.
        """
        if not isinstance(raw, dict):
            raise RecipeValidationError("recipe record must be an object")

        required = ("title", "ingredients", "instructions", "cuisine", "dietary", "difficulty")
        missing = [k for k in required if raw.get(k) is None]
        if raw.get("cookTime") is None and raw.get("cook_time") is None:
            missing.append("cookTime")
        if missing:
            raise RecipeValidationError(f"recipe is missing required fields: {', '.join(missing)}")

        title = raw["title"]
        if not isinstance(title, str) or not title.strip():
            raise RecipeValidationError("'title' must be a non-empty string")
        cuisine = raw["cuisine"]
        if not isinstance(cuisine, str) or not cuisine.strip():
            raise RecipeValidationError("'cuisine' must be a non-empty string")

        rid = recipe_id if recipe_id is not None else raw.get("id")
        if rid is None or str(rid).strip() == "":
            raise RecipeValidationError("recipe has no identifier")

        return cls(
            recipe_id=str(rid),
            title=title.strip(),
            image=image if image is not None else str(raw.get("image") or ""),
            ingredients=_string_tuple(raw["ingredients"], "ingredients"),
            instructions=_string_tuple(raw["instructions"], "instructions"),
            cook_time=parse_cook_time(raw.get("cookTime", raw.get("cook_time"))),
            cuisine=cuisine.strip(),
            dietary=_string_tuple(raw["dietary"], "dietary"),
            difficulty=_parse_difficulty(raw["difficulty"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.recipe_id,
            "title": self.title,
            "image": self.image,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "cookTime": self.cook_time,
            "cuisine": self.cuisine,
            "dietary": list(self.dietary),
            "difficulty": self.difficulty,
        }

    def with_image(self, image: str) -> "Recipe":
        return replace(self, image=image)

    def __repr__(self):
        return f"<Recipe {self.title} ({self.cuisine}, {self.cook_time} min)>"


@dataclass(frozen=True)
class RecipeMatch:
    recipe: Recipe
    match_score: float
    matched_ingredients: Tuple[str, ...] = ()
    missing_ingredients: Tuple[str, ...] = ()
    substitution_suggestions: Tuple[str, ...] = ()
    breakdown: dict = field(default_factory=dict, compare=False, repr=False)

    def with_score(self, score: float) -> "RecipeMatch":
        return replace(self, match_score=score)


class UserPreferences:
    def __init__(
        self,
        cuisines: Optional[Iterable[str]] = None,
        dietary: Optional[Iterable[str]] = None,             # e.g. {"vegan", "gluten-free"}
        difficulties: Optional[Iterable[str]] = None,        # e.g. {"Easy", "Medium"}
        max_cook_time: Optional[int] = None,                 # minutes
        favorite_ingredients: Optional[Iterable[str]] = None,
        spice_level: int = 5,                                # 1-10, informational only
        disliked_ingredients: Optional[Iterable[str]] = None,
    ):
        self.cuisines: Set[str] = set(cuisines or ())
        self.dietary: Set[str] = set(dietary or ())
        self.difficulties: Set[str] = set(difficulties or ())
        self.max_cook_time = max_cook_time
        self.favorite_ingredients: Set[str] = set(favorite_ingredients or ())
        self.spice_level = spice_level
        self.disliked_ingredients: Set[str] = set(disliked_ingredients or ())

    def __eq__(self, other):
        if not isinstance(other, UserPreferences):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        return (
            f"UserPreferences(cuisines={sorted(self.cuisines)!r}, "
            f"dietary={sorted(self.dietary)!r}, max_cook_time={self.max_cook_time!r})"
        )


def default_user_preferences() -> UserPreferences:
    return UserPreferences(
        cuisines={"American", "Italian", "Mexican"},
        difficulties={"Easy", "Medium"},
        max_cook_time=45,
        spice_level=5,
    )
