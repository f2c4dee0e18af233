"""Dependency container for the curation pipeline."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

import httpx

from newsstream.application import (
    CurationPipeline,
    FeedPolicy,
    FeedStore,
    PostProcessor,
    ResultNormalizer,
)
from newsstream.curation import GenerativeNewsCurator, SvgImageGenerator
from newsstream.domain import SearchSource
from newsstream.infrastructure import JsonFeedRepository
from newsstream.infrastructure.sources import (
    BraveSearchSource,
    MediaPageScraper,
    PerplexitySearchSource,
)
from newsstream.infrastructure.sources.base import USER_AGENT
from newsstream.settings import PipelineSettings

log = logging.getLogger(__name__)


@dataclass
class PipelineContainer:
    """Container exposing the pipeline and the resources it owns."""

    settings: PipelineSettings
    http_client: httpx.AsyncClient
    repository: JsonFeedRepository
    feed_store: FeedStore
    sources: List[SearchSource] = field(default_factory=list)
    pipeline: Optional[CurationPipeline] = None

    async def aclose(self) -> None:
        """Release the shared HTTP client."""

        await self.http_client.aclose()


def build_http_client(settings: PipelineSettings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def build_sources(
    settings: PipelineSettings, client: httpx.AsyncClient
) -> List[SearchSource]:
    """Adapters for every provider with credentials, plus the media scraper."""

    tz = ZoneInfo(settings.timezone)
    sources: List[SearchSource] = []
    if settings.brave_api_key:
        sources.append(BraveSearchSource(settings.brave_api_key, client=client))
    else:
        log.info("BRAVE_SEARCH_API_KEY not set; Brave search disabled")
    if settings.perplexity_api_key:
        sources.append(
            PerplexitySearchSource(
                settings.perplexity_api_key,
                language=settings.perplexity_language,
                client=client,
            )
        )
    else:
        log.info("PERPLEXITY_API_KEY not set; Perplexity search disabled")
    sources.append(MediaPageScraper(client=client, today=lambda: datetime.now(tz).date()))
    return sources


def build_pipeline_container(
    settings: PipelineSettings,
    *,
    replace_history: bool = False,
    generate_images: bool | None = None,
    max_items: int | None = None,
    status_publisher: Callable[[str], None] | None = None,
) -> PipelineContainer:
    """Build every component of a curation run from ``settings``.

    Raises:
        ConfigurationError: When the settings do not allow a run.
    """

    # Imported here so that read-only commands do not load the model stack.
    from newsstream.curation.agents import (
        build_curation_agent,
        build_gemini_model,
        build_image_agent,
    )

    settings.validate()
    tz = ZoneInfo(settings.timezone)
    client = build_http_client(settings)
    repository = JsonFeedRepository(settings.feed_file)
    feed_store = FeedStore(
        repository,
        policy=FeedPolicy.REPLACE if replace_history else FeedPolicy.MERGE,
        max_items=max_items if max_items is not None else settings.feed_max_items,
    )
    sources = build_sources(settings, client)

    model = build_gemini_model(settings.google_api_key or "", settings.gemini_model)
    curator = GenerativeNewsCurator(
        build_curation_agent(model), clock=lambda: datetime.now(tz)
    )
    images_enabled = settings.generate_images if generate_images is None else generate_images
    image_generator = SvgImageGenerator(build_image_agent(model)) if images_enabled else None

    pipeline = CurationPipeline(
        sources,
        ResultNormalizer(),
        curator,
        PostProcessor(),
        feed_store,
        image_generator,
        subject_delay=settings.subject_delay,
        status_publisher=status_publisher,
    )
    return PipelineContainer(
        settings=settings,
        http_client=client,
        repository=repository,
        feed_store=feed_store,
        sources=sources,
        pipeline=pipeline,
    )


__all__ = [
    "PipelineContainer",
    "build_http_client",
    "build_pipeline_container",
    "build_sources",
]
