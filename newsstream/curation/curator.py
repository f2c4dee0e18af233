"""Generative curation of filtered search results."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Iterable, List, Sequence

from newsstream.domain import CuratedItem, NewsCurator, SearchResult, SubjectConfig

from .prompts import CURATOR_USER_TEMPLATE, SEARCH_RESULT_TEMPLATE
from .recency import parse_recency
from .schemas import CurationResult

STALENESS_HORIZON_DAYS = 14
MIN_IMPORTANCE = 3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_search_results(results: Sequence[SearchResult], now: datetime) -> str:
    """Serialize results as numbered blocks, each with its computed date."""

    blocks: List[str] = []
    for index, result in enumerate(results, start=1):
        computed = parse_recency(result.recency_hint, now)
        blocks.append(
            SEARCH_RESULT_TEMPLATE.format(
                index=index,
                title=result.title,
                url=result.url,
                snippet=result.description.strip(),
                computed_date=computed.isoformat() if computed else "Unknown",
                age=result.recency_hint or "Unknown",
                thumbnail=result.thumbnail_url or "None",
            )
        )
    return "\n\n".join(blocks)


def build_curation_prompt(
    subject: SubjectConfig, results: Sequence[SearchResult], now: datetime
) -> str:
    """Build the user prompt sent for one subject."""

    return CURATOR_USER_TEMPLATE.format(
        name=subject.canonical_name,
        localized_name=subject.localized_name or subject.canonical_name,
        aliases=", ".join(subject.aliases) or "なし",
        genre=subject.genre or "不明",
        disambiguation=subject.disambiguation_note or "なし",
        today=now.date().isoformat(),
        context=format_search_results(results, now),
    )


def validate_items(
    items: Iterable[CuratedItem],
    today: date,
    *,
    staleness_days: int = STALENESS_HORIZON_DAYS,
    min_importance: int = MIN_IMPORTANCE,
) -> List[CuratedItem]:
    """Apply the importance floor and the date sanity rules.

    Items below ``min_importance`` are dropped, future dates are clamped to
    ``today`` and items dated more than ``staleness_days`` before ``today``
    are dropped.
    """

    horizon = today - timedelta(days=staleness_days)
    accepted: List[CuratedItem] = []
    for item in items:
        if item.importance < min_importance:
            continue
        if item.date > today:
            item = replace(item, date=today)
        elif item.date < horizon:
            continue
        accepted.append(item)
    return accepted


class GenerativeNewsCurator(NewsCurator):
    """Asks a structured-output agent for news items and validates them.

    ``agent`` is a pydantic-ai ``Agent`` whose ``output_type`` is
    :class:`CurationResult`; any object with an awaitable ``run(prompt)``
    returning something with an ``output`` attribute works.
    """

    def __init__(
        self,
        agent: Any,
        *,
        clock: Callable[[], datetime] = _utc_now,
        staleness_days: int = STALENESS_HORIZON_DAYS,
        min_importance: int = MIN_IMPORTANCE,
    ) -> None:
        self._agent = agent
        self._clock = clock
        self._staleness_days = staleness_days
        self._min_importance = min_importance
        self._log = logging.getLogger("newsstream.curator")

    async def curate(
        self, subject: SubjectConfig, results: Sequence[SearchResult]
    ) -> List[CuratedItem]:
        if not results:
            return []

        now = self._clock()
        prompt = build_curation_prompt(subject, results, now)
        try:
            run = await self._agent.run(prompt)
            output = run.output
            if not isinstance(output, CurationResult):
                raise TypeError(
                    f"unexpected curation output type: {type(output).__name__}"
                )
            proposed = [entry.to_domain() for entry in output.news]
        except Exception:
            self._log.exception(
                "Curation failed for %s; discarding the response", subject.canonical_name
            )
            return []

        accepted = validate_items(
            proposed,
            now.date(),
            staleness_days=self._staleness_days,
            min_importance=self._min_importance,
        )
        self._log.debug(
            "%s: model proposed %d items, %d passed validation",
            subject.canonical_name,
            len(proposed),
            len(accepted),
        )
        return accepted


__all__ = [
    "GenerativeNewsCurator",
    "MIN_IMPORTANCE",
    "STALENESS_HORIZON_DAYS",
    "build_curation_prompt",
    "format_search_results",
    "validate_items",
]
