from pathlib import Path

import pytest

from newsstream.settings import ConfigurationError, PipelineSettings

_ENV_VARS = (
    "GOOGLE_GENERATIVE_AI_API_KEY",
    "BRAVE_SEARCH_API_KEY",
    "PERPLEXITY_API_KEY",
    "NEWSSTREAM_GEMINI_MODEL",
    "NEWSSTREAM_SUBJECTS_FILE",
    "NEWSSTREAM_FEED_FILE",
    "NEWSSTREAM_GENERATE_IMAGES",
    "NEWSSTREAM_FEED_MAX_ITEMS",
    "NEWSSTREAM_SUBJECT_DELAY",
    "NEWSSTREAM_HTTP_TIMEOUT",
    "NEWSSTREAM_PERPLEXITY_LANGUAGE",
    "NEWSSTREAM_LOG_LEVEL",
    "NEWSSTREAM_TIMEZONE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = PipelineSettings.from_env()

    assert settings.subjects_file == Path("data/artists.json")
    assert settings.feed_file == Path("data/news.json")
    assert settings.generate_images is False
    assert settings.feed_max_items is None
    assert settings.subject_delay == 2.0
    assert settings.perplexity_language == "both"
    assert settings.timezone == "Asia/Tokyo"


def test_values_are_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", " g-key ")
    monkeypatch.setenv("BRAVE_SEARCH_API_KEY", "b-key")
    monkeypatch.setenv("NEWSSTREAM_GENERATE_IMAGES", "yes")
    monkeypatch.setenv("NEWSSTREAM_FEED_MAX_ITEMS", "200")
    monkeypatch.setenv("NEWSSTREAM_SUBJECT_DELAY", "0")
    monkeypatch.setenv("NEWSSTREAM_PERPLEXITY_LANGUAGE", "JA")

    settings = PipelineSettings.from_env()

    assert settings.google_api_key == "g-key"
    assert settings.generate_images is True
    assert settings.feed_max_items == 200
    assert settings.subject_delay == 0.0
    assert settings.perplexity_language == "ja"
    settings.validate()


def test_missing_gemini_key_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BRAVE_SEARCH_API_KEY", "b-key")

    with pytest.raises(ConfigurationError, match="GOOGLE_GENERATIVE_AI_API_KEY"):
        PipelineSettings.from_env().validate()


def test_one_search_key_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "g-key")

    with pytest.raises(ConfigurationError):
        PipelineSettings.from_env().validate()

    monkeypatch.setenv("PERPLEXITY_API_KEY", "p-key")
    PipelineSettings.from_env().validate()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("NEWSSTREAM_PERPLEXITY_LANGUAGE", "fr"),
        ("NEWSSTREAM_SUBJECT_DELAY", "-1"),
        ("NEWSSTREAM_TIMEZONE", "Mars/Olympus_Mons"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "g-key")
    monkeypatch.setenv("BRAVE_SEARCH_API_KEY", "b-key")
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        PipelineSettings.from_env().validate()


def test_non_numeric_values_fail_early(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEWSSTREAM_HTTP_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        PipelineSettings.from_env()
