"""Tests for the fixed media site scraper."""
from __future__ import annotations

import asyncio
from datetime import date

import httpx

from newsstream.domain import SearchBudget, SubjectConfig
from newsstream.infrastructure.sources.media_scraper import (
    BARKS,
    NATALIE,
    MediaPageScraper,
    extract_articles,
)

TODAY = date(2024, 5, 10)

NATALIE_HTML = """
<html><body>
<ul class="news-list">
  <li><a href="/music/news/570001"><p class="title">Perfume、新曲リリース決定</p></a>
      <span class="date">2024年5月8日</span></li>
  <li><a href="/music/news/570002">Perfumeツアー追加公演</a><time>5月9日 12:00</time></li>
  <li><a href="/music/news/570002">同じ記事へのリンク</a></li>
  <li><a href="/music/news/570003">短い</a></li>
  <li><a href="/music/artist/12345">アーティストページ</a></li>
</ul>
</body></html>
"""

BARKS_HTML = """
<div class="list">
  <div class="item"><a href="https://www.barks.jp/news/123456/">Perfume、新作MV公開</a><span>2024.05.07</span></div>
  <div class="item"><a href="/news/123457">Perfume、フェス出演決定</a></div>
  <div class="item"><a href="https://example.com/news/1">external article link</a></div>
</div>
"""


def test_natalie_links_titles_and_dates() -> None:
    articles = extract_articles(NATALIE_HTML, NATALIE, TODAY)

    assert [(a.url, a.title, a.published) for a in articles] == [
        ("https://natalie.mu/music/news/570001", "Perfume、新曲リリース決定", date(2024, 5, 8)),
        ("https://natalie.mu/music/news/570002", "Perfumeツアー追加公演", date(2024, 5, 9)),
    ]


def test_barks_dates_are_optional() -> None:
    articles = extract_articles(BARKS_HTML, BARKS, TODAY)

    assert [(a.url, a.published) for a in articles] == [
        ("https://www.barks.jp/news/123456/", date(2024, 5, 7)),
        ("https://www.barks.jp/news/123457", None),
    ]


def test_results_carry_published_hint_and_title_as_description() -> None:
    article, undated = extract_articles(BARKS_HTML, BARKS, TODAY)

    result = article.to_search_result()
    assert result.description == result.title == "Perfume、新作MV公開"
    assert result.recency_hint == "Published 2024-05-07"
    assert result.hostname == "www.barks.jp"
    assert undated.to_search_result().recency_hint is None


def test_page_without_matches_yields_nothing() -> None:
    assert extract_articles("<html><body><p>メンテナンス中</p></body></html>", NATALIE, TODAY) == []


def test_search_scrapes_known_sites_and_skips_unknown_keys() -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if request.url.host == "natalie.mu":
            return httpx.Response(200, text=NATALIE_HTML)
        return httpx.Response(503, text="unavailable")

    subject = SubjectConfig(
        canonical_name="Perfume",
        localized_name="Perfume",
        fixed_source_pages={
            "natalie": "/music/artist/12345",
            "barks": "/artist/?id=52000391",
            "myspace": "/perfume",
        },
    )

    async def no_sleep(_seconds: float) -> None:
        return None

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            scraper = MediaPageScraper(client=client, sleep=no_sleep, today=lambda: TODAY)
            return await scraper.search(subject, SearchBudget())

    results = asyncio.run(run())

    assert requested == [
        "https://natalie.mu/music/artist/12345",
        "https://www.barks.jp/artist/?id=52000391",
    ]
    assert [r.url for r in results] == [
        "https://natalie.mu/music/news/570001",
        "https://natalie.mu/music/news/570002",
    ]
