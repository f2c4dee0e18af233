"""Pydantic models describing what the generative model must return."""
from __future__ import annotations

import re
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from newsstream.domain import Category, CuratedItem

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class CuratedNewsPayload(BaseModel):
    """One news item proposed by the model."""

    title: str = Field(
        description="日本語のキャッチーかつ簡潔なタイトル（30文字以内）。煽り文句は避ける。"
    )
    summary: str = Field(
        description="ニュースの概要を落ち着いたトーンの日本語で要約（100〜150文字）。"
    )
    url: str = Field(description="情報源のURL（検索結果から引用）。")
    image_url: str | None = Field(
        default=None,
        description="記事のメイン画像のURL。検索結果のサムネイルがある場合のみ。なければ空。",
    )
    source: str = Field(description="情報源のサイト名（ドメイン名やサイト名）。")
    date: str = Field(
        description="記事の日付 (YYYY-MM-DD形式)。Computed Date があればそれを使う。"
    )
    category: Literal["Release", "Tour", "Interview", "Media", "Other"] = Field(
        description="ニュースのカテゴリ。"
    )
    importance: int = Field(
        ge=1,
        le=5,
        description="ニュースの重要度（1:小ネタ 〜 5:超重要）。3未満は基本的に除外対象。",
    )

    @field_validator("date")
    @classmethod
    def _check_calendar_date(cls, value: str) -> str:
        candidate = value.strip()
        if not _ISO_DATE_RE.match(candidate):
            raise ValueError("date must use the YYYY-MM-DD format")
        date.fromisoformat(candidate)
        return candidate

    def to_domain(self) -> CuratedItem:
        """Convert the validated payload into a ``CuratedItem``."""

        return CuratedItem(
            title=self.title.strip(),
            summary=self.summary.strip(),
            url=self.url.strip(),
            source=self.source.strip(),
            date=date.fromisoformat(self.date),
            category=Category(self.category),
            importance=self.importance,
            image_url=(self.image_url or "").strip() or None,
        )


class CurationResult(BaseModel):
    """Whole structured response of a curation request."""

    news: list[CuratedNewsPayload] = Field(default_factory=list)


class SvgImage(BaseModel):
    """Structured response of an illustration request."""

    svg: str = Field(description="生成されたSVGコード")


__all__ = ["CuratedNewsPayload", "CurationResult", "SvgImage"]
