# recipe_generator_agent.py
import json
import logging
import re
import uuid
from typing import Callable, Iterable, Optional, Sequence

from openai import OpenAI

from lookup_tables import DEFAULT_RECIPE_IMAGE
from models import Recipe, RecipeValidationError

logger = logging.getLogger(__name__)

# Backend contract: prompt in, raw model text out.
TextBackend = Callable[[str], str]

_OPENING_FENCE_RE = re.compile(r"```json", re.IGNORECASE)
_CLOSING_FENCE = "```"


class MalformedAIResponseError(ValueError):
    """The generative backend's text did not contain a usable recipe."""


def build_recipe_prompt(ingredients: Sequence[str], cuisines: Optional[Iterable[str]] = None,
                        dietary: Optional[Iterable[str]] = None) -> str:
    cuisines = [c for c in (cuisines or ()) if c]
    dietary = [d for d in (dietary or ()) if d]

    constraints = [f"Ingredients provided: {', '.join(ingredients) if ingredients else 'none'}"]
    if cuisines:
        constraints.append(f"Preferred cuisines: {', '.join(cuisines)}")
    if dietary:
        constraints.append(f"Dietary requirements (the recipe MUST satisfy all of them): {', '.join(dietary)}")

    return (
        "You are a creative chef and culinary expert. Invent one unique and delicious recipe "
        "based on the constraints below.\n\n"
        + "\n".join(constraints)
        + "\n\n"
        "Your response MUST be a single valid JSON object with exactly these fields, wrapped in a "
        "```json fenced block:\n"
        "```json\n"
        "{\n"
        '  "title": "A creative and appealing recipe title",\n'
        '  "ingredients": ["every ingredient with its amount, e.g. \'1 cup flour\'"],\n'
        '  "instructions": ["one clear step per entry"],\n'
        '  "cookTime": 30,\n'
        '  "cuisine": "The most appropriate cuisine, e.g. \'Italian\' or \'Fusion\'",\n'
        '  "dietary": ["dietary characteristics if applicable, e.g. \'vegan\'"],\n'
        '  "difficulty": "Easy, Medium or Hard"\n'
        "}\n"
        "```\n"
        "cookTime is the total time in minutes as a number. You may add ingredients that are not "
        "in the provided list if necessary. Do not write any text, explanation or other markdown "
        "before or after the fenced JSON block."
    )


def extract_json_block(text: str) -> str:
    """Return the text between a ```json marker and the next ``` marker."""
    if not text:
        raise MalformedAIResponseError("empty response")
    opening = _OPENING_FENCE_RE.search(text)
    if not opening:
        raise MalformedAIResponseError("could not find a ```json block in the response")
    end = text.find(_CLOSING_FENCE, opening.end())
    if end == -1:
        raise MalformedAIResponseError("```json block is not closed")
    return text[opening.end():end].strip()


def parse_recipe_response(text: str, recipe_id: str, image: str = "") -> Recipe:
    """
    Parse the backend's raw text into a Recipe.

    Raises MalformedAIResponseError on missing markers, invalid JSON, or a
    payload that fails recipe validation.
    """
    block = extract_json_block(text)
    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        raise MalformedAIResponseError(f"invalid JSON in response: {e}") from e
    if not isinstance(data, dict):
        raise MalformedAIResponseError("response JSON is not an object")
    try:
        return Recipe.from_dict(data, recipe_id=recipe_id, image=image)
    except RecipeValidationError as e:
        raise MalformedAIResponseError(str(e)) from e


class OpenAITextBackend:
    """Text backend over the OpenAI Responses API."""

    def __init__(self, client=None, model: str = "gpt-4o-mini", temperature: float = 0.8, api_key: Optional[str] = None):
        if client is None:
            client = OpenAI(api_key=api_key) if api_key else OpenAI()
        self.client = client
        self.model = model
        self.temperature = temperature

    def __call__(self, prompt: str) -> str:
        response = self.client.responses.create(
            model=self.model,
            input=[
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                },
            ],
            temperature=self.temperature,
        )

        output = response.output[0]
        text_chunks = []
        for c in output.content:
            if c.type == "output_text":
                text_chunks.append(c.text)
        return "".join(text_chunks).strip()


def _new_recipe_id() -> str:
    return f"ai-{uuid.uuid4().hex}"


class RecipeGeneratorAgent:
    """
    Invents a recipe from the user's ingredients through a generative-text
    backend. Returns None on any failure so callers can fall back to
    corpus matching.
    """

    def __init__(self, backend: Optional[TextBackend] = None, image_agent=None,
                 id_factory: Callable[[], str] = _new_recipe_id):
        self.backend = backend
        self.image_agent = image_agent
        self.id_factory = id_factory

    @classmethod
    def from_settings(cls, settings, image_agent=None) -> "RecipeGeneratorAgent":
        backend = None
        if settings.openai_api_key:
            backend = OpenAITextBackend(api_key=settings.openai_api_key, model=settings.openai_model)
        return cls(backend=backend, image_agent=image_agent)

    def _resolve_image(self, recipe: Recipe) -> str:
        if self.image_agent is None:
            return DEFAULT_RECIPE_IMAGE
        try:
            return self.image_agent.search_recipe_image(recipe.title, recipe.cuisine) or DEFAULT_RECIPE_IMAGE
        except Exception as e:
            logger.warning("Image lookup failed for %r: %s", recipe.title, e)
            return DEFAULT_RECIPE_IMAGE

    def generate_recipe(self, ingredients: Sequence[str], cuisines: Optional[Iterable[str]] = None,
                        dietary: Optional[Iterable[str]] = None) -> Optional[Recipe]:
        if self.backend is None:
            logger.info("No generative backend configured, skipping recipe generation")
            return None

        prompt = build_recipe_prompt(list(ingredients or ()), cuisines, dietary)
        try:
            text = self.backend(prompt)
            recipe = parse_recipe_response(text, recipe_id=self.id_factory())
        except MalformedAIResponseError as e:
            logger.warning("Discarding malformed generated recipe: %s", e)
            return None
        except Exception as e:
            logger.error("Generative backend call failed: %s", e)
            return None

        logger.info("Generated recipe %r", recipe.title)
        return recipe.with_image(self._resolve_image(recipe))


def generate_recipe(ingredients: Sequence[str], cuisines: Optional[Iterable[str]] = None,
                    dietary: Optional[Iterable[str]] = None, backend: Optional[TextBackend] = None,
                    image_agent=None) -> Optional[Recipe]:
    """Generative entry point; returns None when no backend is given or anything fails."""
    return RecipeGeneratorAgent(backend=backend, image_agent=image_agent).generate_recipe(
        ingredients, cuisines, dietary
    )
