from conftest import make_recipe
from models import UserPreferences
from preference_agent import DietaryFilterAgent, build_preference_profile, combine_preferences
from recipe_data import get_recipe_by_id


def titles(recipes):
    return [r.title for r in recipes]


def test_vegan_filter_on_static_corpus(corpus):
    kept = DietaryFilterAgent().filter_recipes(corpus, UserPreferences(dietary={"vegan"}))
    assert titles(kept) == ["Simple Salad", "Rice and Beans", "Tomato Soup"]


def test_no_preferences_keeps_everything(corpus):
    assert DietaryFilterAgent().filter_recipes(corpus, None) == corpus
    assert DietaryFilterAgent().filter_recipes(corpus, UserPreferences()) == corpus


def test_plant_based_alternatives_are_allowed():
    agent = DietaryFilterAgent()
    recipe = make_recipe("Oat Latte", ["1 cup almond milk", "coffee"])
    assert agent.violations(recipe, ["dairy-free"]) == []
    assert agent.violations(make_recipe("Latte", ["whole milk", "coffee"]), ["dairy-free"]) == ["dairy-free: whole milk"]


def test_restriction_labels_are_canonicalised():
    agent = DietaryFilterAgent()
    toast = make_recipe("Toast", ["2 slices bread", "butter"])
    assert agent.violations(toast, ["Celiac"]) == ["gluten-free: slices bread"]
    assert agent.violations(toast, ["lactose intolerant"]) == ["dairy-free: butter"]


def test_tagged_recipes_are_trusted():
    agent = DietaryFilterAgent()
    bread = make_recipe("GF Bread", ["gluten free bread"], dietary=("Gluten Free",))
    assert agent.violations(bread, ["gluten-free"]) == []


def test_unknown_restrictions_are_ignored():
    agent = DietaryFilterAgent()
    assert agent.violations(get_recipe_by_id("1"), ["pescatarian"]) == []


def test_disliked_ingredients_are_dropped(corpus):
    kept = DietaryFilterAgent().filter_recipes(corpus, UserPreferences(disliked_ingredients={"Garlic"}))
    assert all("garlic" not in r.ingredients for r in kept)
    assert "Pancakes" in titles(kept)


def test_build_preference_profile():
    history = [get_recipe_by_id("4"), get_recipe_by_id("6"), get_recipe_by_id("8")]
    profile = build_preference_profile(history)
    assert profile.cuisines == {"American"}
    assert profile.difficulties == {"Easy"}
    assert profile.max_cook_time == 13
    assert "butter" in profile.favorite_ingredients


def test_empty_history_profile():
    profile = build_preference_profile([])
    assert profile.cuisines == set()
    assert profile.max_cook_time == 30


def test_combine_preferences():
    implicit = UserPreferences(cuisines={"American"}, max_cook_time=20, favorite_ingredients={"butter"}, dietary={"keto"})
    explicit = UserPreferences(cuisines={"Thai"}, max_cook_time=40, dietary={"vegan"}, spice_level=8,
                               disliked_ingredients={"cilantro"})
    merged = combine_preferences(implicit, explicit)
    assert merged.cuisines == {"American", "Thai"}
    assert merged.max_cook_time == 20
    assert merged.dietary == {"vegan"}
    assert merged.spice_level == 8
    assert merged.disliked_ingredients == {"cilantro"}
    assert merged.favorite_ingredients == {"butter"}


def test_plant_based_products_pass_vegan_and_dairy_free():
    agent = DietaryFilterAgent()
    satay = make_recipe("Satay Noodles", ["3 tbsp creamy peanut butter", "1 cup coconut cream", "noodles"])
    assert agent.violations(satay, ["vegan", "dairy-free"]) == []
    assert agent.filter_recipes([satay], UserPreferences(dietary={"vegan"})) == [satay]


def test_plant_based_exemption_does_not_hide_animal_products():
    agent = DietaryFilterAgent()
    toast = make_recipe("Honey Toast", ["butter", "honey", "peanut butter"])
    assert agent.violations(toast, ["vegan"]) == ["vegan: butter", "vegan: honey"]
    assert agent.violations(make_recipe("Rice Bowl", ["rice"]), ["keto"]) == ["keto: rice"]
