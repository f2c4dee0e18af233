"""Scraper for artist pages on fixed Japanese music media sites."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

from newsstream.application.normalizer import dedupe_by_url
from newsstream.domain import SearchBudget, SearchResult, SubjectConfig

from .base import USER_AGENT, HttpSearchSource, SourceError

_COLLAPSE_WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)
_FULL_JA_DATE_RE = re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日")
_SHORT_JA_DATE_RE = re.compile(r"(\d{1,2})月(\d{1,2})日")
_DOTTED_DATE_RE = re.compile(r"(\d{4})\.(\d{2})\.(\d{2})")

MIN_TITLE_LENGTH = 5
#: Ancestor levels inspected around a link when looking for its date.
_DATE_SEARCH_DEPTH = 3


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_natalie_date(text: str, today: date) -> Optional[date]:
    """``YYYY年M月D日`` or ``M月D日`` (the latter in the current year)."""

    match = _FULL_JA_DATE_RE.search(text)
    if match:
        return _safe_date(*map(int, match.groups()))
    match = _SHORT_JA_DATE_RE.search(text)
    if match:
        month, day = map(int, match.groups())
        return _safe_date(today.year, month, day)
    return None


def parse_barks_date(text: str, today: date) -> Optional[date]:
    """``YYYY.MM.DD``."""

    match = _DOTTED_DATE_RE.search(text)
    if match:
        return _safe_date(*map(int, match.groups()))
    return None


@dataclass(frozen=True)
class MediaSite:
    """Description of one supported media site."""

    #: Key used in the subject's ``mediaPages`` mapping.
    key: str
    label: str
    base_url: str
    #: Pattern matched against the path of candidate article links.
    link_pattern: re.Pattern[str]
    parse_date: Callable[[str, date], Optional[date]]


NATALIE = MediaSite(
    key="natalie",
    label="音楽ナタリー",
    base_url="https://natalie.mu",
    link_pattern=re.compile(r"^/music/news/\d+/?$"),
    parse_date=parse_natalie_date,
)

BARKS = MediaSite(
    key="barks",
    label="BARKS",
    base_url="https://www.barks.jp",
    link_pattern=re.compile(r"^/news/\d+"),
    parse_date=parse_barks_date,
)

DEFAULT_SITES: Dict[str, MediaSite] = {site.key: site for site in (NATALIE, BARKS)}


@dataclass(frozen=True)
class ScrapedArticle:
    title: str
    url: str
    published: Optional[date]
    site: MediaSite

    def to_search_result(self) -> SearchResult:
        hint = f"Published {self.published.isoformat()}" if self.published else None
        return SearchResult(
            title=self.title,
            url=self.url,
            description=self.title,
            recency_hint=hint,
            hostname=urlsplit(self.url).hostname,
        )


def _clean(text: str) -> str:
    return _COLLAPSE_WHITESPACE_RE.sub(" ", text.replace("\xa0", " ")).strip()


def _article_url(href: str, site: MediaSite) -> Optional[str]:
    """Absolute article URL for ``href``, or ``None`` when it is not an article."""

    parts = urlsplit(urljoin(site.base_url + "/", href.strip()))
    if parts.hostname != urlsplit(site.base_url).hostname:
        return None
    if not site.link_pattern.search(parts.path):
        return None
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


def _holds_other_article(node: Tag, url: str, site: MediaSite) -> bool:
    for anchor in node.find_all("a", href=True):
        other = _article_url(str(anchor["href"]), site)
        if other is not None and other != url:
            return True
    return False


def _nearby_date(anchor: Tag, url: str, site: MediaSite, today: date) -> Optional[date]:
    """Date found in the anchor or its ancestors that wrap no other article."""

    node = anchor
    for _ in range(_DATE_SEARCH_DEPTH + 1):
        published = site.parse_date(_clean(node.get_text(" ")), today)
        if published is not None:
            return published
        parent = node.parent
        if parent is None or _holds_other_article(parent, url, site):
            return None
        node = parent
    return None


def extract_articles(html: str, site: MediaSite, today: date) -> List[ScrapedArticle]:
    """Find article links, titles and nearby dates in a site's artist page."""

    soup = BeautifulSoup(html, "html.parser")
    articles: List[ScrapedArticle] = []
    seen: set[str] = set()

    for anchor in soup.find_all("a", href=True):
        url = _article_url(str(anchor["href"]), site)
        if url is None or url in seen:
            continue
        title = _clean(anchor.get_text(" "))
        if len(title) < MIN_TITLE_LENGTH:
            continue
        seen.add(url)
        published = _nearby_date(anchor, url, site, today)
        articles.append(ScrapedArticle(title=title, url=url, published=published, site=site))
    return articles


class MediaPageScraper(HttpSearchSource):
    """Scrapes the configured artist pages of each known media site."""

    name = "media"

    def __init__(
        self,
        *,
        sites: Dict[str, MediaSite] | None = None,
        today: Callable[[], date] = date.today,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._sites = dict(DEFAULT_SITES if sites is None else sites)
        self._today = today
        self._log = logging.getLogger("newsstream.sources.media")

    async def search(
        self, subject: SubjectConfig, budget: SearchBudget
    ) -> List[SearchResult]:
        results: List[SearchResult] = []
        fetched = 0
        for key, page in subject.fixed_source_pages.items():
            site = self._sites.get(key)
            if site is None:
                self._log.warning("Unknown media site '%s' for %s; skipping", key, subject.canonical_name)
                continue
            if fetched:
                await self._pause()
            fetched += 1
            articles = await self.scrape(site, page)
            self._log.info("%s: found %d articles for %s", site.label, len(articles), subject.canonical_name)
            results.extend(article.to_search_result() for article in articles)
        return dedupe_by_url(results)

    async def scrape(self, site: MediaSite, page: str) -> List[ScrapedArticle]:
        """Fetch one artist page; failures yield an empty list."""

        url = urljoin(site.base_url + "/", page)
        try:
            response = await self._get(
                url, headers={"User-Agent": USER_AGENT, "Accept": "text/html"}
            )
        except SourceError as exc:
            self._log.warning("Failed to scrape %s: %s", site.label, exc)
            return []
        return extract_articles(response.text, site, self._today())


__all__ = [
    "BARKS",
    "DEFAULT_SITES",
    "MediaPageScraper",
    "MediaSite",
    "NATALIE",
    "ScrapedArticle",
    "extract_articles",
    "parse_barks_date",
    "parse_natalie_date",
]
