"""Generative curation: recency parsing, prompts, schemas and validation."""

from .curator import (
    MIN_IMPORTANCE,
    STALENESS_HORIZON_DAYS,
    GenerativeNewsCurator,
    build_curation_prompt,
    format_search_results,
    validate_items,
)
from .images import SvgImageGenerator, svg_to_data_url
from .recency import RecencyAge, parse_age, parse_recency
from .schemas import CuratedNewsPayload, CurationResult, SvgImage

__all__ = [
    "MIN_IMPORTANCE",
    "STALENESS_HORIZON_DAYS",
    "CuratedNewsPayload",
    "CurationResult",
    "GenerativeNewsCurator",
    "RecencyAge",
    "SvgImage",
    "SvgImageGenerator",
    "build_curation_prompt",
    "format_search_results",
    "parse_age",
    "parse_recency",
    "svg_to_data_url",
    "validate_items",
]
