"""Adapter for Perplexity's ``sonar`` answer engine.

The answer text is exposed as one search result and every cited URL as a
further result, so the curator can weigh the summary against its sources.
"""
from __future__ import annotations

import logging
from typing import Any, List
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, ValidationError

from newsstream.domain import SearchBudget, SearchResult, SubjectConfig

from .base import HttpSearchSource, SourceError

PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"
PERPLEXITY_HOME = "https://www.perplexity.ai/"
LANGUAGES = ("ja", "en", "both")

SYSTEM_PROMPT_JA = """あなたは音楽ニュースに特化した情報収集アシスタントです。

## 検索の指針
- 日本語と英語の両方のソースから最新のニュースを検索してください
- 特に日本のメディア（音楽ナタリー、BARKS、リアルサウンド、Billboard Japan、オリコンなど）からの情報を優先してください
- 海外アーティストの場合も、日本語で書かれた記事があれば含めてください

## 収集対象のニュース
- 新曲・新アルバムのリリース情報
- ツアー・ライブ・フェス出演情報
- インタビュー・メディア出演情報
- コラボレーション・新プロジェクト
- 受賞・ランキング情報

## 回答形式
- 各ニュースは日付と出典を明確に記載してください
- 最新の情報を優先して報告してください
- 必ず引用元URLを含めてください
- 回答は日本語で行ってください"""

SYSTEM_PROMPT_EN = """You are a music news research assistant.

## Search Guidelines
- Search for the latest news from both Japanese and international sources
- For Japanese artists, prioritize Japanese media sources (Natalie, BARKS, Real Sound, Billboard Japan, Oricon)
- Include both English and Japanese articles when available

## News Categories to Cover
- New song/album releases
- Tour, live shows, and festival appearances
- Interviews and media appearances
- Collaborations and new projects
- Awards and chart rankings

## Response Format
- Include the date and source for each news item
- Prioritize the most recent information
- Always include citation URLs
- Respond in English"""

SYSTEM_PROMPT_BOTH = """あなたは音楽ニュースに特化した多言語情報収集アシスタントです。

## 検索の指針
- 日本語と英語の両方のソースから網羅的に最新のニュースを検索してください
- 日本のアーティストには日本のメディア（音楽ナタリー、BARKS、リアルサウンド、Billboard Japan、オリコンなど）を優先
- 海外アーティストには国際メディア（Pitchfork、NME、Rolling Stone、Billboard など）も検索

## 収集対象のニュース
- 新曲・新アルバムのリリース情報（発売日、収録曲など）
- ツアー・ライブ・フェス出演情報（日程、会場など）
- インタビュー・メディア出演情報
- コラボレーション・新プロジェクト
- 受賞・ランキング・チャート情報

## 回答形式
- 各ニュースには日付と出典名を必ず記載してください
- 直近1週間以内の情報を優先して報告してください
- 必ず引用元URLを含めてください
- ニュースが見つからない場合は、その旨を正直に報告してください
- 回答は日本語で行ってください（ソースが英語でも要約は日本語で）"""

SYSTEM_PROMPTS = {"ja": SYSTEM_PROMPT_JA, "en": SYSTEM_PROMPT_EN, "both": SYSTEM_PROMPT_BOTH}


def build_music_news_query(artist_name: str, language: str = "both") -> str:
    """User message asking for the latest music news about ``artist_name``."""

    if language == "ja":
        return (
            f"「{artist_name}」の最新音楽ニュースを教えてください。"
            "新曲リリース、ツアー、ライブ、インタビュー、メディア出演などの情報を、"
            "日本語メディアを中心に検索してください。"
        )
    if language == "en":
        return (
            f'Find the latest music news about "{artist_name}". Include new releases, '
            "tours, interviews, and media appearances from the past week."
        )
    return (
        f"「{artist_name}」の最新音楽ニュースを網羅的に教えてください。\n\n"
        "検索してほしい内容：\n"
        "- 新曲・新アルバムのリリース情報\n"
        "- ツアー・ライブ・フェス出演情報\n"
        "- インタビュー・メディア出演\n"
        "- コラボレーション・新プロジェクト\n\n"
        "日本語メディア（音楽ナタリー、BARKS、オリコン等）と海外メディア（Pitchfork、NME等）"
        "の両方から、直近1週間の最新情報を探してください。"
    )


class _Message(BaseModel):
    content: str = ""


class _Choice(BaseModel):
    message: _Message


class PerplexityResponse(BaseModel):
    """Fields of a chat completion that the adapter relies on."""

    choices: List[_Choice] = Field(min_length=1)
    citations: List[str] = Field(default_factory=list)


def _hostname(url: str) -> str | None:
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None
    return parts.hostname


class PerplexitySearchSource(HttpSearchSource):
    """Asks ``sonar`` for recent news and exposes its citations."""

    name = "perplexity"

    def __init__(
        self,
        api_key: str,
        *,
        language: str = "both",
        model: str = "sonar",
        **kwargs: Any,
    ) -> None:
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported Perplexity language: {language}")
        super().__init__(**kwargs)
        self._api_key = api_key
        self._language = language
        self._model = model
        self._log = logging.getLogger("newsstream.sources.perplexity")

    async def search(
        self, subject: SubjectConfig, budget: SearchBudget
    ) -> List[SearchResult]:
        query = build_music_news_query(subject.canonical_name, self._language)
        try:
            return await self.ask(query)
        except SourceError as exc:
            self._log.warning("Perplexity query for %s failed: %s", subject.canonical_name, exc)
            return []

    async def ask(self, query: str) -> List[SearchResult]:
        """Send ``query`` and convert the answer plus citations into results.

        Raises:
            SourceError: On transport errors or a malformed completion.
        """

        response = await self._post(
            PERPLEXITY_URL,
            json={
                "model": self._model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPTS[self._language]},
                    {"role": "user", "content": query},
                ],
                "return_citations": True,
            },
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        try:
            completion = PerplexityResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SourceError(f"malformed Perplexity response: {exc}") from exc

        results = [
            SearchResult(
                title=f"Perplexity AI Summary for: {query}",
                url=PERPLEXITY_HOME,
                description=completion.choices[0].message.content,
                recency_hint="Just now",
                hostname="perplexity.ai",
            )
        ]
        for position, url in enumerate(completion.citations, start=1):
            hostname = _hostname(url)
            if hostname is None:
                self._log.warning("Invalid URL in citations: %s", url)
                continue
            results.append(
                SearchResult(
                    title=f"Source [{position}] from Perplexity",
                    url=url,
                    description=f"Cited source for query: {query}",
                    recency_hint="Unknown",
                    hostname=hostname,
                )
            )
        return results


__all__ = ["PerplexitySearchSource", "build_music_news_query"]
