"""Adapter for the Brave web search API."""
from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from newsstream.application.normalizer import dedupe_by_url
from newsstream.domain import SearchBudget, SearchResult, SubjectConfig

from .base import HttpSearchSource, SourceError

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"

NEWS_KEYWORDS_EN = ("news", "latest", "update", "announcement")
NEWS_KEYWORDS_JA = ("ニュース", "最新", "速報", "情報")
MUSIC_KEYWORDS_EN = ("release", "tour", "interview", "album", "concert")
MUSIC_KEYWORDS_JA = ("リリース", "ツアー", "インタビュー", "アルバム", "ライブ", "新曲")

_MAX_COUNT_PER_QUERY = 20


class _MetaUrl(BaseModel):
    hostname: str


class _Thumbnail(BaseModel):
    src: str


class BraveWebResult(BaseModel):
    """Subset of a Brave web result used by the pipeline."""

    title: str
    url: str
    description: str = ""
    age: Optional[str] = None
    page_age: Optional[str] = None
    meta_url: Optional[_MetaUrl] = None
    thumbnail: Optional[_Thumbnail] = None

    def to_domain(self) -> SearchResult:
        return SearchResult(
            title=self.title,
            url=self.url,
            description=self.description,
            recency_hint=self.age or self.page_age,
            hostname=self.meta_url.hostname if self.meta_url else None,
            thumbnail_url=self.thumbnail.src if self.thumbnail else None,
        )


class _BraveWeb(BaseModel):
    results: List[Any] = []


class BraveResponse(BaseModel):
    web: Optional[_BraveWeb] = None


def build_queries(subject: SubjectConfig) -> List[str]:
    """Query variants used to maximise recall for one subject."""

    canonical = subject.canonical_name
    localized = subject.localized_name or canonical
    queries = [
        f'"{canonical}" {" ".join(NEWS_KEYWORDS_EN[:2])} {" ".join(MUSIC_KEYWORDS_EN[:3])}',
        f'"{localized}" {" ".join(NEWS_KEYWORDS_JA[:2])} {" ".join(MUSIC_KEYWORDS_JA[:3])}',
        f'"{localized}" 最新ニュース',
        f'"{canonical}" latest news',
    ]
    queries.extend(f'"{alias}" {NEWS_KEYWORDS_EN[0]}' for alias in subject.aliases)

    exclusions = " ".join(f'-"{term}"' for term in subject.search_exclusions)
    unique = dict.fromkeys(queries)
    if exclusions:
        return [f"{query} {exclusions}" for query in unique]
    return list(unique)


class BraveSearchSource(HttpSearchSource):
    """Runs several Brave queries per subject and merges them by URL."""

    name = "brave"

    def __init__(
        self,
        api_key: str,
        *,
        language: str | None = None,
        country: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._api_key = api_key
        self._language = language
        self._country = country
        self._log = logging.getLogger("newsstream.sources.brave")

    async def search(
        self, subject: SubjectConfig, budget: SearchBudget
    ) -> List[SearchResult]:
        queries = build_queries(subject)
        per_query = min(_MAX_COUNT_PER_QUERY, max(1, math.ceil(budget.count / len(queries))))

        collected: List[SearchResult] = []
        for position, query in enumerate(queries):
            if position:
                await self._pause()
            try:
                collected.extend(
                    await self.search_query(query, count=per_query, freshness=budget.freshness)
                )
            except SourceError as exc:
                self._log.warning("Query '%s' failed: %s", query, exc)
        merged = dedupe_by_url(collected)
        return merged[: budget.count]

    async def search_query(
        self, query: str, *, count: int = 10, freshness: str = "pw"
    ) -> List[SearchResult]:
        """Run a single query and validate the payload.

        Raises:
            SourceError: On transport errors or a malformed response envelope.
        """

        params = {
            "q": query,
            "count": str(count),
            "freshness": freshness,
            "text_decorations": "0",
            "result_filter": "web",
        }
        if self._language:
            params["search_lang"] = self._language
        if self._country:
            params["country"] = self._country

        response = await self._get(
            BRAVE_SEARCH_URL,
            params=params,
            headers={
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
                "X-Subscription-Token": self._api_key,
            },
        )
        try:
            envelope = BraveResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SourceError(f"malformed Brave response: {exc}") from exc

        results: List[SearchResult] = []
        for index, raw in enumerate(envelope.web.results if envelope.web else []):
            try:
                results.append(BraveWebResult.model_validate(raw).to_domain())
            except ValidationError as exc:
                self._log.debug("Skipping invalid result %d for '%s': %s", index, query, exc)
        return results


__all__ = ["BraveSearchSource", "BraveWebResult", "build_queries"]
