import pytest

from ingredient_normalizer import normalize_ingredient, normalize_ingredients


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2 cups chopped fresh basil", "basil"),
        ("1/2 tsp salt", "salt"),
        ("500g flour", "flour"),
        ("1 onion", "onion"),
        ("1 lemon", "lemon"),
        ("Salt and Pepper", "salt pepper"),
        ("3 tablespoons olive oil", "olive oil"),
        ("Garlic, minced", "garlic"),
        ("  RICE  ", "rice"),
    ],
)
def test_normalize_ingredient(raw, expected):
    assert normalize_ingredient(raw) == expected


def test_normalize_is_idempotent():
    for raw in ["2 cups chopped fresh basil", "1 lb. ground beef", "Juice of 1 lime", "eggs"]:
        once = normalize_ingredient(raw)
        assert normalize_ingredient(once) == once


def test_empty_and_noise_only_inputs():
    assert normalize_ingredient("") == ""
    assert normalize_ingredient(None) == ""
    assert normalize_ingredient("2 cups") == ""
    assert normalize_ingredient("chopped and diced") == ""


def test_normalize_ingredients_drops_empty_entries():
    assert normalize_ingredients(["2 cups", "", "1 onion", "fresh garlic"]) == ["onion", "garlic"]
    assert normalize_ingredients([]) == []
