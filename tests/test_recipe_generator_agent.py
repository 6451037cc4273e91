import json
from types import SimpleNamespace

import pytest

from lookup_tables import DEFAULT_RECIPE_IMAGE
from recipe_generator_agent import (
    MalformedAIResponseError,
    OpenAITextBackend,
    RecipeGeneratorAgent,
    build_recipe_prompt,
    extract_json_block,
    generate_recipe,
    parse_recipe_response,
)

RECIPE_JSON = {
    "title": "Garlic Fried Rice",
    "ingredients": ["2 cups cooked rice", "3 cloves garlic", "1 onion"],
    "instructions": ["Fry the garlic", "Add rice and onion", "Serve"],
    "cookTime": 20,
    "cuisine": "Asian",
    "dietary": ["vegan"],
    "difficulty": "Easy",
}


def fenced(payload, before="Here you go!\n", after="\nEnjoy."):
    return f"{before}```json\n{json.dumps(payload)}\n```{after}"


class StubImageAgent:
    def __init__(self, url="https://img.example/rice.jpg"):
        self.url = url
        self.calls = []

    def search_recipe_image(self, title, cuisine=None):
        self.calls.append((title, cuisine))
        return self.url


def test_no_backend_returns_none():
    assert generate_recipe(["rice"]) is None
    assert RecipeGeneratorAgent().generate_recipe(["rice"]) is None


def test_generates_recipe_from_fenced_json():
    prompts = []

    def backend(prompt):
        prompts.append(prompt)
        return fenced(RECIPE_JSON)

    agent = RecipeGeneratorAgent(backend=backend, id_factory=lambda: "ai-1")
    recipe = agent.generate_recipe(["rice", "garlic"], cuisines=["Asian"], dietary=["vegan"])

    assert recipe.recipe_id == "ai-1"
    assert recipe.title == "Garlic Fried Rice"
    assert recipe.ingredients == tuple(RECIPE_JSON["ingredients"])
    assert recipe.cook_time == 20
    assert recipe.difficulty == "Easy"
    assert recipe.image == DEFAULT_RECIPE_IMAGE
    assert "rice, garlic" in prompts[0]
    assert "vegan" in prompts[0]


def test_generated_recipe_gets_searched_image():
    images = StubImageAgent()
    recipe = generate_recipe(["rice"], backend=lambda p: fenced(RECIPE_JSON), image_agent=images)
    assert recipe.image == images.url
    assert images.calls == [("Garlic Fried Rice", "Asian")]


def test_image_failure_falls_back_to_default():
    class BrokenImages:
        def search_recipe_image(self, title, cuisine=None):
            raise RuntimeError("boom")

    recipe = generate_recipe(["rice"], backend=lambda p: fenced(RECIPE_JSON), image_agent=BrokenImages())
    assert recipe.image == DEFAULT_RECIPE_IMAGE


def test_generated_ids_are_unique():
    agent = RecipeGeneratorAgent(backend=lambda p: fenced(RECIPE_JSON))
    first = agent.generate_recipe(["rice"])
    second = agent.generate_recipe(["rice"])
    assert first.recipe_id != second.recipe_id
    assert first.recipe_id.startswith("ai-")


@pytest.mark.parametrize(
    "text",
    [
        "",
        json.dumps(RECIPE_JSON),
        "```json\n" + json.dumps(RECIPE_JSON),
        "```json\n{not json}\n```",
        "```json\n[1, 2]\n```",
        fenced({k: v for k, v in RECIPE_JSON.items() if k != "instructions"}),
        fenced(dict(RECIPE_JSON, difficulty="Impossible")),
    ],
)
def test_malformed_responses_give_none(text):
    assert generate_recipe(["rice"], backend=lambda p: text) is None


def test_backend_error_gives_none():
    def backend(prompt):
        raise ConnectionError("network down")

    assert generate_recipe(["rice"], backend=backend) is None


def test_extract_json_block_is_case_insensitive():
    assert extract_json_block('```JSON\n{"a": 1}\n```') == '{"a": 1}'


def test_extract_json_block_errors():
    with pytest.raises(MalformedAIResponseError):
        extract_json_block('```json {"a": 1}')
    with pytest.raises(MalformedAIResponseError):
        extract_json_block('{"a": 1}')


def test_parse_accepts_cook_time_text():
    recipe = parse_recipe_response(fenced(dict(RECIPE_JSON, cookTime="25 minutes")), recipe_id="x")
    assert recipe.cook_time == 25


def test_prompt_lists_required_fields():
    prompt = build_recipe_prompt(["eggs"])
    for key in ("title", "ingredients", "instructions", "cookTime", "cuisine", "dietary", "difficulty"):
        assert f'"{key}"' in prompt
    assert "```json" in prompt


def test_openai_backend_joins_output_text():
    response = SimpleNamespace(
        output=[
            SimpleNamespace(
                content=[
                    SimpleNamespace(type="output_text", text="```json\n"),
                    SimpleNamespace(type="output_text", text="{}\n```"),
                ]
            )
        ]
    )
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        return response

    client = SimpleNamespace(responses=SimpleNamespace(create=create))
    backend = OpenAITextBackend(client=client, model="test-model")

    assert backend("make dinner") == "```json\n{}\n```"
    assert calls[0]["model"] == "test-model"
    assert calls[0]["input"][0]["content"][0]["text"] == "make dinner"
