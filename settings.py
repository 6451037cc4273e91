# settings.py
import logging
import os
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_PATH = ".streamlit/secrets.toml"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Shipped config templates use these in place of real keys.
_PLACEHOLDERS = {
    "YOUR_OPENAI_API_KEY",
    "YOUR_SPOONACULAR_API_KEY",
    "YOUR_UNSPLASH_ACCESS_KEY",
}


def _streamlit_secrets() -> Dict[str, Any]:
    # Only populated when running under `streamlit run` with a secrets file
    try:
        import streamlit as st
        return dict(st.secrets)
    except Exception as e:
        logger.debug("Streamlit secrets unavailable: %s", e)
        return {}


def _file_secrets(path: Optional[str]) -> Dict[str, Any]:
    if not path or not os.path.exists(path):
        return {}
    return toml.load(path)


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """
    Runtime configuration. Each key is looked up in Streamlit secrets, then
    the TOML secrets file, then the environment (same name, upper-case).
    """

    def __init__(
        self,
        openai_api_key: Optional[str] = None,
        openai_model: str = "gpt-4o-mini",
        spoonacular_api_key: Optional[str] = None,
        unsplash_access_key: Optional[str] = None,
        use_mealdb_fallback: bool = True,
        max_recipe_results: int = 20,
        request_timeout: float = 10,
        image_request_delay: float = 0.1,
        debug: bool = False,
    ):
        self.openai_api_key = openai_api_key
        self.openai_model = openai_model
        self.spoonacular_api_key = spoonacular_api_key
        self.unsplash_access_key = unsplash_access_key
        self.use_mealdb_fallback = use_mealdb_fallback
        self.max_recipe_results = max_recipe_results
        self.request_timeout = request_timeout
        self.image_request_delay = image_request_delay
        self.debug = debug

    @classmethod
    def load(cls, secrets_path: Optional[str] = DEFAULT_SECRETS_PATH, use_streamlit: bool = True) -> "Settings":
        sources = []
        if use_streamlit:
            sources.append(_streamlit_secrets())
        sources.append(_file_secrets(secrets_path))

        def lookup(name: str, default=None):
            for source in sources:
                value = source.get(name)
                if value is not None and value != "":
                    break
            else:
                value = os.getenv(name)
            if value is None or value == "" or value in _PLACEHOLDERS:
                return default
            return value

        return cls(
            openai_api_key=lookup("OPENAI_API_KEY"),
            openai_model=lookup("OPENAI_MODEL", "gpt-4o-mini"),
            spoonacular_api_key=lookup("SPOONACULAR_API_KEY"),
            unsplash_access_key=lookup("UNSPLASH_ACCESS_KEY"),
            use_mealdb_fallback=_as_bool(lookup("USE_MEALDB_FALLBACK", True)),
            max_recipe_results=int(lookup("MAX_RECIPE_RESULTS", 20)),
            request_timeout=float(lookup("REQUEST_TIMEOUT", 10)),
            image_request_delay=float(lookup("IMAGE_REQUEST_DELAY", 0.1)),
            debug=_as_bool(lookup("DEBUG", False)),
        )

    def __repr__(self) -> str:
        # never print keys
        return (
            f"Settings(openai={'set' if self.openai_api_key else 'unset'}, "
            f"spoonacular={'set' if self.spoonacular_api_key else 'unset'}, "
            f"unsplash={'set' if self.unsplash_access_key else 'unset'}, model={self.openai_model!r})"
        )


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)
