from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from newsstream.domain import SearchBudget, SubjectConfig
from newsstream.infrastructure.sources.perplexity import (
    SYSTEM_PROMPT_EN,
    PerplexitySearchSource,
    build_music_news_query,
)

SUBJECT = SubjectConfig(canonical_name="Perfume", localized_name="パフューム")


def _search(handler, *, language: str = "both"):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            source = PerplexitySearchSource("secret", language=language, client=client)
            return await source.search(SUBJECT, SearchBudget())

    return asyncio.run(run())


def test_answer_and_citations_become_results() -> None:
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer secret"
        sent.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "choices": [{"message": {"role": "assistant", "content": "Perfume announced a tour."}}],
                "citations": ["https://natalie.mu/music/news/1", "not a url", "https://www.barks.jp/news/2"],
            },
        )

    results = _search(handler, language="en")

    assert sent[0]["model"] == "sonar"
    assert sent[0]["messages"][0]["content"] == SYSTEM_PROMPT_EN
    assert "Perfume" in sent[0]["messages"][1]["content"]
    summary, *citations = results
    assert summary.url == "https://www.perplexity.ai/"
    assert summary.description == "Perfume announced a tour."
    assert summary.recency_hint == "Just now"
    assert [c.url for c in citations] == [
        "https://natalie.mu/music/news/1",
        "https://www.barks.jp/news/2",
    ]
    assert all(c.recency_hint == "Unknown" for c in citations)
    assert citations[1].hostname == "www.barks.jp"


def test_http_error_yields_no_results() -> None:
    assert _search(lambda request: httpx.Response(401, json={"error": "unauthorized"})) == []


def test_malformed_completion_yields_no_results() -> None:
    assert _search(lambda request: httpx.Response(200, json={"choices": []})) == []


def test_queries_differ_by_language() -> None:
    assert "日本語メディアを中心に" in build_music_news_query("Perfume", "ja")
    assert build_music_news_query("Perfume", "en").startswith('Find the latest music news about "Perfume"')
    assert "Pitchfork" in build_music_news_query("Perfume", "both")


def test_unknown_language_is_rejected() -> None:
    with pytest.raises(ValueError):
        PerplexitySearchSource("secret", language="fr")
