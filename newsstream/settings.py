"""Settings shared by the pipeline, loaded from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
_DEFAULT_SUBJECTS_FILE = "data/artists.json"
_DEFAULT_FEED_FILE = "data/news.json"
_DEFAULT_SUBJECT_DELAY = 2.0
_DEFAULT_HTTP_TIMEOUT = 30.0
_DEFAULT_TIMEZONE = "Asia/Tokyo"
_PERPLEXITY_LANGUAGES = ("ja", "en", "both")
_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigurationError(RuntimeError):
    """Raised when the pipeline cannot start with the given configuration."""


def get_env(name: str, default: str | None = None) -> str | None:
    """Return an environment variable with surrounding blanks removed."""

    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _get_float(name: str, default: float) -> float:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable '{name}' must be a number") from exc


def _get_optional_int(name: str) -> int | None:
    raw = get_env(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable '{name}' must be an integer") from exc
    return value if value > 0 else None


@dataclass
class PipelineSettings:
    """Credentials, file locations and tuning knobs of a curation run."""

    google_api_key: str | None
    brave_api_key: str | None
    perplexity_api_key: str | None
    gemini_model: str = _DEFAULT_GEMINI_MODEL
    subjects_file: Path = Path(_DEFAULT_SUBJECTS_FILE)
    feed_file: Path = Path(_DEFAULT_FEED_FILE)
    generate_images: bool = False
    feed_max_items: int | None = None
    subject_delay: float = _DEFAULT_SUBJECT_DELAY
    http_timeout: float = _DEFAULT_HTTP_TIMEOUT
    perplexity_language: str = "both"
    log_level: str = "INFO"
    #: Zone whose calendar date counts as "today" for a run.
    timezone: str = _DEFAULT_TIMEZONE

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        language = (get_env("NEWSSTREAM_PERPLEXITY_LANGUAGE", "both") or "both").lower()
        return cls(
            google_api_key=get_env("GOOGLE_GENERATIVE_AI_API_KEY"),
            brave_api_key=get_env("BRAVE_SEARCH_API_KEY"),
            perplexity_api_key=get_env("PERPLEXITY_API_KEY"),
            gemini_model=get_env("NEWSSTREAM_GEMINI_MODEL", _DEFAULT_GEMINI_MODEL)
            or _DEFAULT_GEMINI_MODEL,
            subjects_file=Path(
                get_env("NEWSSTREAM_SUBJECTS_FILE", _DEFAULT_SUBJECTS_FILE)
                or _DEFAULT_SUBJECTS_FILE
            ),
            feed_file=Path(
                get_env("NEWSSTREAM_FEED_FILE", _DEFAULT_FEED_FILE) or _DEFAULT_FEED_FILE
            ),
            generate_images=(get_env("NEWSSTREAM_GENERATE_IMAGES", "") or "").lower()
            in _TRUE_VALUES,
            feed_max_items=_get_optional_int("NEWSSTREAM_FEED_MAX_ITEMS"),
            subject_delay=_get_float("NEWSSTREAM_SUBJECT_DELAY", _DEFAULT_SUBJECT_DELAY),
            http_timeout=_get_float("NEWSSTREAM_HTTP_TIMEOUT", _DEFAULT_HTTP_TIMEOUT),
            perplexity_language=language,
            log_level=get_env("NEWSSTREAM_LOG_LEVEL", "INFO") or "INFO",
            timezone=get_env("NEWSSTREAM_TIMEZONE", _DEFAULT_TIMEZONE) or _DEFAULT_TIMEZONE,
        )

    def validate(self) -> None:
        """Check the credentials required before any subject is processed.

        Raises:
            ConfigurationError: When the Gemini key is missing, when no search
                provider key is set, or when a setting has an invalid value.
        """

        if not self.google_api_key:
            raise ConfigurationError("GOOGLE_GENERATIVE_AI_API_KEY is required.")
        if not self.brave_api_key and not self.perplexity_api_key:
            raise ConfigurationError(
                "At least one of BRAVE_SEARCH_API_KEY or PERPLEXITY_API_KEY is required."
            )
        if self.perplexity_language not in _PERPLEXITY_LANGUAGES:
            raise ConfigurationError(
                "NEWSSTREAM_PERPLEXITY_LANGUAGE must be one of: "
                + ", ".join(_PERPLEXITY_LANGUAGES)
            )
        if self.subject_delay < 0:
            raise ConfigurationError("NEWSSTREAM_SUBJECT_DELAY cannot be negative")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone: {self.timezone}") from exc


__all__ = ["ConfigurationError", "PipelineSettings", "get_env"]
