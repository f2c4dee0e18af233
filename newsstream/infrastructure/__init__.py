"""Infrastructure adapters: feed file, subjects file and search sources."""

from .feed_repository import FeedStoreError, JsonFeedRepository
from .subjects import load_subjects, parse_subjects

__all__ = ["FeedStoreError", "JsonFeedRepository", "load_subjects", "parse_subjects"]
