import pytest

from conftest import make_recipe
from ingredient_normalizer import normalize_ingredients
from match_agent import IngredientMatchAgent
from models import UserPreferences
from recipe_data import get_recipe_by_id


def test_rice_and_beans_scenario():
    agent = IngredientMatchAgent()
    recipe = get_recipe_by_id("5")  # Rice and Beans (Mexican)

    m = agent.calculate_match(recipe, ["rice", "onion", "garlic"])

    assert m.matched_ingredients == ("rice", "onion", "garlic")
    assert m.missing_ingredients == ("beans", "salt")
    assert m.breakdown["base"] == pytest.approx(0.6)
    # rice-onion and rice-garlic are known pairs, onion-garlic is not
    assert m.breakdown["compatibility"] == pytest.approx(2 / 3)
    assert m.breakdown["substitution"] == 0.0
    assert m.breakdown["preference"] == 0.0
    # onion and garlic are typical of Mexican food, rice is not
    assert m.breakdown["cuisine"] == pytest.approx(2 / 3)
    assert m.match_score == pytest.approx(0.8)


def test_matched_and_missing_partition_recipe_ingredients(corpus):
    agent = IngredientMatchAgent()
    for recipe in corpus:
        m = agent.calculate_match(recipe, ["2 eggs", "butter", "tomatoes", "garlic"])
        normalized = normalize_ingredients(recipe.ingredients)
        assert sorted(m.matched_ingredients + m.missing_ingredients) == sorted(normalized)
        assert not set(m.matched_ingredients) & set(m.missing_ingredients)


def test_score_is_bounded(corpus):
    agent = IngredientMatchAgent()
    prefs = UserPreferences(
        cuisines={"Mediterranean"},
        dietary={"vegan"},
        difficulties={"Easy"},
        max_cook_time=60,
        favorite_ingredients={"tomato"},
    )
    everything = [i for r in corpus for i in r.ingredients]
    for recipe in corpus:
        m = agent.calculate_match(recipe, everything, prefs)
        assert 0.0 <= m.match_score <= 1.0
    soup = agent.calculate_match(get_recipe_by_id("7"), everything, prefs)
    assert soup.match_score == 1.0


def test_recipe_without_ingredients_scores_zero():
    agent = IngredientMatchAgent()
    m = agent.calculate_match(make_recipe("Empty"), ["rice"])
    assert m.match_score == 0.0
    assert m.matched_ingredients == ()
    assert m.missing_ingredients == ()


def test_no_user_ingredients_scores_only_bonuses():
    agent = IngredientMatchAgent()
    m = agent.calculate_match(get_recipe_by_id("5"), [])
    assert m.matched_ingredients == ()
    assert m.match_score == 0.0


def test_preference_bonus_counts_each_aligned_preference():
    agent = IngredientMatchAgent()
    recipe = get_recipe_by_id("5")
    prefs = UserPreferences(
        cuisines={"mexican"},
        dietary={"Vegan"},
        difficulties={"easy"},
        max_cook_time=30,
        favorite_ingredients={"2 cups rice", "saffron"},
    )
    bonus = agent.preference_bonus(recipe, normalize_ingredients(recipe.ingredients), prefs)
    assert bonus == pytest.approx(0.3 + 0.3 + 0.2 + 0.2 + 0.1)


def test_preference_bonus_with_empty_preferences():
    agent = IngredientMatchAgent()
    recipe = get_recipe_by_id("5")
    assert agent.preference_bonus(recipe, ["rice"], UserPreferences()) == 0.0
    assert agent.preference_bonus(recipe, ["rice"], None) == 0.0


def test_substitution_bonus_is_averaged_over_substituted():
    agent = IngredientMatchAgent()
    # saffron has no substitute, so it does not dilute the credit
    assert agent.substitution_bonus(["milk", "saffron"], ["almond milk"]) == pytest.approx(0.5)
    assert agent.substitution_bonus(["milk", "butter"], ["almond milk", "olive oil"]) == pytest.approx(0.5)
    assert agent.substitution_bonus(["saffron"], ["almond milk"]) == 0.0
    assert agent.substitution_bonus([], ["almond milk"]) == 0.0


def test_substitution_bonus_lifts_score():
    agent = IngredientMatchAgent()
    recipe = make_recipe("Porridge", ["oats", "butter", "honey", "cinnamon"])
    m = agent.calculate_match(recipe, ["oats", "olive oil"])
    assert m.missing_ingredients == ("butter", "honey", "cinnamon")
    assert m.breakdown["substitution"] == pytest.approx(0.5)
    assert m.match_score == pytest.approx(0.25 + 0.15 * 0.5)


def test_substitution_suggestions_are_attached():
    agent = IngredientMatchAgent()
    m = agent.calculate_match(make_recipe("Toast", ["butter", "bread"]), ["bread", "olive oil"])
    assert m.missing_ingredients == ("butter",)
    assert m.substitution_suggestions == ("Use olive oil instead of butter",)


def test_word_level_matching_covers_variants():
    agent = IngredientMatchAgent()
    recipe = make_recipe("Pancakes", ["flour", "milk", "eggs"])
    m = agent.calculate_match(recipe, ["2 cups flour", "almond milk", "egg"])
    assert m.missing_ingredients == ()
    assert m.substitution_suggestions == ()


def test_compatibility_bonus():
    agent = IngredientMatchAgent()
    assert agent.compatibility_bonus(["salmon", "lemon", "dill"]) == pytest.approx(2 / 3)
    assert agent.compatibility_bonus(["salmon"]) == 0.0


def test_cuisine_bonus_unknown_cuisine():
    agent = IngredientMatchAgent()
    assert agent.cuisine_bonus(make_recipe("Borscht", ["beet"], cuisine="Ukrainian"), ["beet"]) == 0.0
