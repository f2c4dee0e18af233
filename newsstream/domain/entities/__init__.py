"""Domain entities used by the curation pipeline."""
from .news_item import Category, CuratedItem, PersistedItem
from .search_result import SearchResult
from .subject import SubjectConfig

__all__ = ["Category", "CuratedItem", "PersistedItem", "SearchResult", "SubjectConfig"]
