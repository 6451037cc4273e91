import sys
from pathlib import Path

# Ensure project root is on sys.path so the flat modules import when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest

from models import Recipe
from recipe_data import get_static_recipes


def make_recipe(title="Test Dish", ingredients=(), **kwargs):
    kwargs.setdefault("recipe_id", title.lower().replace(" ", "-"))
    return Recipe(title=title, ingredients=tuple(ingredients), **kwargs)


@pytest.fixture
def corpus():
    return get_static_recipes()


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")
