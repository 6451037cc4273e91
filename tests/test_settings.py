import pytest

from settings import Settings

KEYS = (
    "OPENAI_API_KEY", "OPENAI_MODEL", "SPOONACULAR_API_KEY", "UNSPLASH_ACCESS_KEY",
    "USE_MEALDB_FALLBACK", "MAX_RECIPE_RESULTS", "REQUEST_TIMEOUT", "IMAGE_REQUEST_DELAY", "DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_any_source(tmp_path):
    s = Settings.load(secrets_path=str(tmp_path / "missing.toml"), use_streamlit=False)
    assert s.openai_api_key is None
    assert s.openai_model == "gpt-4o-mini"
    assert s.use_mealdb_fallback is True
    assert s.max_recipe_results == 20
    assert s.debug is False


def test_reads_toml_secrets(tmp_path):
    path = tmp_path / "secrets.toml"
    path.write_text(
        'OPENAI_API_KEY = "sk-test"\n'
        'SPOONACULAR_API_KEY = "YOUR_SPOONACULAR_API_KEY"\n'
        "MAX_RECIPE_RESULTS = 5\n"
        "USE_MEALDB_FALLBACK = false\n"
        "DEBUG = true\n"
    )
    s = Settings.load(secrets_path=str(path), use_streamlit=False)
    assert s.openai_api_key == "sk-test"
    assert s.spoonacular_api_key is None
    assert s.max_recipe_results == 5
    assert s.use_mealdb_fallback is False
    assert s.debug is True


def test_environment_fallback(tmp_path, monkeypatch):
    path = tmp_path / "secrets.toml"
    path.write_text('OPENAI_API_KEY = "from-file"\n')
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "u-key")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")

    s = Settings.load(secrets_path=str(path), use_streamlit=False)

    assert s.openai_api_key == "from-file"
    assert s.unsplash_access_key == "u-key"
    assert s.request_timeout == 2.5


def test_repr_hides_keys():
    s = Settings(openai_api_key="sk-secret")
    assert "sk-secret" not in repr(s)
    assert "openai=set" in repr(s)
