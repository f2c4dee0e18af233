"""Newsstream - curated news feed for a list of music artists."""
from .application import CurationPipeline, FeedPolicy, RunReport
from .container import build_pipeline_container
from .domain import Category, CuratedItem, PersistedItem, SearchResult, SubjectConfig
from .settings import ConfigurationError, PipelineSettings

__all__ = [
    "Category",
    "ConfigurationError",
    "CuratedItem",
    "CurationPipeline",
    "FeedPolicy",
    "PersistedItem",
    "PipelineSettings",
    "RunReport",
    "SearchResult",
    "SubjectConfig",
    "build_pipeline_container",
]
