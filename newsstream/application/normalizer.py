"""Merging, deduplication and coarse filtering of raw search results."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from newsstream.curation.recency import parse_age
from newsstream.domain import SearchResult

#: Domains whose pages never carry announcements worth curating.
BLOCKED_DOMAINS: frozenset[str] = frozenset(
    {
        # lyrics
        "genius.com",
        "azlyrics.com",
        "lyrics.com",
        "musixmatch.com",
        "uta-net.com",
        "utaten.com",
        "j-lyric.net",
        "kashinavi.com",
        "lyrical-nonsense.com",
        # ticket resale
        "ticketjam.jp",
        "ticket.co.jp",
        "ticketcamp.net",
        "viagogo.com",
        "stubhub.com",
        # encyclopedic and reference sites
        "wikipedia.org",
        "weblio.jp",
        "fandom.com",
        "dic.nicovideo.jp",
        "dic.pixiv.net",
        # marketplaces and discographies
        "discogs.com",
        "amazon.co.jp",
        "amazon.com",
        "mercari.com",
        "jp.mercari.com",
        "auctions.yahoo.co.jp",
        "rakuten.co.jp",
        "rateyourmusic.com",
    }
)


def is_blocked_hostname(hostname: str, blocked: Iterable[str] = BLOCKED_DOMAINS) -> bool:
    """Tell whether ``hostname`` is one of ``blocked`` or a subdomain of one."""

    host = hostname.strip().lower().rstrip(".")
    if not host:
        return False
    return any(host == domain or host.endswith("." + domain) for domain in blocked)


def dedupe_by_url(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Keep the first occurrence of every URL, preserving input order."""

    seen_urls: set[str] = set()
    unique: List[SearchResult] = []
    for result in results:
        if result.url in seen_urls:
            continue
        seen_urls.add(result.url)
        unique.append(result)
    return unique


@dataclass(slots=True)
class NormalizationOutcome:
    """Filtered results of one subject together with the step counters."""

    results: List[SearchResult]
    raw_count: int
    deduped_count: int
    blocked: int = 0
    stale: int = 0
    dropped_urls: List[str] = field(default_factory=list)

    @property
    def filtered_count(self) -> int:
        return len(self.results)


class ResultNormalizer:
    """Prepares the concatenated adapter output of a subject for curation."""

    def __init__(self, blocked_domains: Iterable[str] = BLOCKED_DOMAINS) -> None:
        self._blocked_domains = frozenset(domain.lower() for domain in blocked_domains)
        self._log = logging.getLogger("newsstream.normalizer")

    def normalize(self, results: Sequence[SearchResult]) -> NormalizationOutcome:
        """Dedup by URL, then drop blocked domains and obviously stale hits."""

        unique = dedupe_by_url(results)
        outcome = NormalizationOutcome(
            results=[],
            raw_count=len(results),
            deduped_count=len(unique),
        )
        for result in unique:
            hostname = result.resolved_hostname()
            if is_blocked_hostname(hostname, self._blocked_domains):
                self._log.debug("blocked domain %s: %s", hostname, result.url)
                outcome.blocked += 1
                outcome.dropped_urls.append(result.url)
                continue
            age = parse_age(result.recency_hint)
            if age is not None and age.is_stale():
                self._log.debug("stale (%s): %s", result.recency_hint, result.url)
                outcome.stale += 1
                outcome.dropped_urls.append(result.url)
                continue
            outcome.results.append(result)
        return outcome


__all__ = [
    "BLOCKED_DOMAINS",
    "NormalizationOutcome",
    "ResultNormalizer",
    "dedupe_by_url",
    "is_blocked_hostname",
]
