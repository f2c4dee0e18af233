"""Search source adapters."""

from .base import HttpSearchSource, SourceError
from .brave import BraveSearchSource
from .media_scraper import MediaPageScraper
from .perplexity import PerplexitySearchSource

__all__ = [
    "BraveSearchSource",
    "HttpSearchSource",
    "MediaPageScraper",
    "PerplexitySearchSource",
    "SourceError",
]
