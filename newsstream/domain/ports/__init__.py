"""Ports connecting the pipeline to providers, models and storage."""
from .feed_repository import FeedRepository
from .image_generator import ImageGenerator
from .news_curator import NewsCurator
from .search_source import SearchBudget, SearchSource

__all__ = [
    "FeedRepository",
    "ImageGenerator",
    "NewsCurator",
    "SearchBudget",
    "SearchSource",
]
