# image_agent.py
import logging
import time
from typing import Dict, Iterable, Optional

import requests

from lookup_tables import CUISINE_DEFAULT_IMAGES, DEFAULT_RECIPE_IMAGE
from models import Recipe

logger = logging.getLogger(__name__)


class ImageSearchError(Exception):
    pass


class ImageSearchAgent:
    """
    Looks up a photo for a recipe on Unsplash.

    Without an access key, or on any failure, the default recipe image is
    returned instead. Batch lookups go one request at a time with a pause in
    between to stay inside Unsplash's rate limits.
    """

    def __init__(self, access_key: Optional[str] = None, timeout: float = 10,
                 request_delay: float = 0.1, sleep=time.sleep):
        self.base_url = "https://api.unsplash.com"
        self.access_key = access_key
        self.timeout = timeout
        self.request_delay = request_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings) -> "ImageSearchAgent":
        return cls(
            access_key=settings.unsplash_access_key,
            timeout=settings.request_timeout,
            request_delay=settings.image_request_delay,
        )

    @staticmethod
    def build_query(title: str, cuisine: Optional[str] = None) -> str:
        query = title
        if cuisine and cuisine.lower() != "international":
            query += f" {cuisine} food"
        return query + " food recipe cooking"

    def _search(self, query: str) -> Optional[str]:
        url = f"{self.base_url}/search/photos"
        params = {"query": query, "orientation": "landscape", "per_page": 5}
        headers = {"Authorization": f"Client-ID {self.access_key}"}

        logger.info("Searching Unsplash for %r", query)
        try:
            resp = requests.get(url, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise ImageSearchError(f"Unsplash search failed: {e}") from e

        results = (data.get("results") or []) if isinstance(data, dict) else []
        if not results:
            return None
        return (results[0].get("urls") or {}).get("regular")

    def search_recipe_image(self, title: str, cuisine: Optional[str] = None) -> str:
        if not self.access_key:
            logger.info("No Unsplash access key configured, using default image")
            return self.default_image()
        try:
            url = self._search(self.build_query(title, cuisine))
        except ImageSearchError as e:
            logger.warning("%s", e)
            return self.default_image()
        if not url:
            logger.info("No images found for %r, using default", title)
            return self.default_image()
        return url

    def search_recipe_images(self, recipes: Iterable[Recipe]) -> Dict[str, str]:
        """Map recipe id -> image URL, throttled to one request at a time."""
        images = {}
        for i, recipe in enumerate(recipes):
            if i and self.access_key:
                self._sleep(self.request_delay)
            images[recipe.recipe_id] = self.search_recipe_image(recipe.title, recipe.cuisine)
        return images

    @staticmethod
    def default_image() -> str:
        return DEFAULT_RECIPE_IMAGE

    @staticmethod
    def cuisine_default_image(cuisine: str) -> str:
        return CUISINE_DEFAULT_IMAGES.get((cuisine or "").lower(), DEFAULT_RECIPE_IMAGE)
