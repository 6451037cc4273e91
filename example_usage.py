import random

from models import UserPreferences
from ranking_agent import RuleBasedStrategy
from recipe_data import get_static_recipes
from recipe_finder_agent import RecipeFinderAgent
from settings import Settings, configure_logging

settings = Settings.load()
configure_logging(settings.debug)

finder = RecipeFinderAgent.from_settings(settings)
pantry = ["2 cups rice", "1 onion", "garlic", "canned black beans", "salt", "almond milk"]
prefs = UserPreferences(cuisines={"Mexican"}, dietary={"vegan"}, max_cook_time=30)

for mode in ("normal", "loose", "surprise"):
    result = finder.find_recipes(pantry, mode, prefs, corpus=get_static_recipes(), rng=random.Random(7))
    print(f"\n== {mode}: {len(result.matches)} recipe(s)")
    for m in result.matches:
        print(f"- {m.recipe.title}: {m.match_score:.2f} missing={list(m.missing_ingredients)}")
        for s in m.substitution_suggestions:
            print(f"    {s}")

result = finder.find_recipes(pantry, "loose", corpus=get_static_recipes(), strategy=RuleBasedStrategy())
print("\n== loose (rule-based):", [m.recipe.title for m in result.matches])
