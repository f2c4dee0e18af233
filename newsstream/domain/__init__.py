"""Public API of the newsstream domain.

Entities and ports are re-exported so they can be imported directly from
``newsstream.domain``.
"""

from .entities import Category, CuratedItem, PersistedItem, SearchResult, SubjectConfig
from .ports import (
    FeedRepository,
    ImageGenerator,
    NewsCurator,
    SearchBudget,
    SearchSource,
)

__all__ = [
    "Category",
    "CuratedItem",
    "PersistedItem",
    "SearchResult",
    "SubjectConfig",
    "FeedRepository",
    "ImageGenerator",
    "NewsCurator",
    "SearchBudget",
    "SearchSource",
]
