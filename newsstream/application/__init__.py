"""Application services of the curation run."""

from .curation_pipeline import CurationPipeline, RunReport, SubjectReport
from .feed_store import FeedPolicy, FeedStore, merge_feed, order_feed
from .normalizer import BLOCKED_DOMAINS, NormalizationOutcome, ResultNormalizer, dedupe_by_url
from .post_processor import PostProcessor, PostProcessResult

__all__ = [
    "BLOCKED_DOMAINS",
    "CurationPipeline",
    "FeedPolicy",
    "FeedStore",
    "NormalizationOutcome",
    "PostProcessResult",
    "PostProcessor",
    "ResultNormalizer",
    "RunReport",
    "SubjectReport",
    "dedupe_by_url",
    "merge_feed",
    "order_feed",
]
